from io import StringIO

from django.core.management import call_command
from django.test import TestCase, override_settings

from jurycore.apps.accounts.models import Judge
from jurycore.apps.core.testing import FAST_HASHERS
from jurycore.apps.registration.models import Submission
from jurycore.apps.scoring.models import ScoreRecord
from jurycore.apps.selections.models import Selection


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class SeedDemoJuryTest(TestCase):
    def test_seed_creates_consistent_demo(self):
        out = StringIO()
        call_command("seed_demo_jury", "--per-category", "4", "--judges", "2", "--seed-scores", stdout=out)

        self.assertEqual(Judge.objects.count(), 3)
        self.assertTrue(Judge.objects.get(code="00832").is_admin)
        self.assertEqual(Submission.objects.count(), 12)
        self.assertEqual(Selection.objects.filter(scope="top5").count(), 5)
        self.assertEqual(
            list(Selection.objects.filter(scope="top5").values_list("rank", flat=True)),
            [1, 2, 3, 4, 5],
        )
        self.assertTrue(ScoreRecord.objects.exists())
        self.assertIn("Listo", out.getvalue())

    def test_seed_is_rerunnable(self):
        call_command("seed_demo_jury", "--per-category", "2", stdout=StringIO())
        call_command("seed_demo_jury", "--per-category", "2", "--reset", stdout=StringIO())
        self.assertEqual(Submission.objects.count(), 6)
        self.assertEqual(Selection.objects.filter(scope="top5").count(), 5)

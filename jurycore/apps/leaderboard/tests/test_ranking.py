from types import SimpleNamespace

from django.test import SimpleTestCase, TestCase, override_settings

from jurycore.apps.accounts.context import Actor
from jurycore.apps.core.testing import ADMIN_CODE, FAST_HASHERS, login_as, make_judge, make_submission
from jurycore.apps.leaderboard.services.ranking import (
    JudgeRef,
    RankedSubmission,
    build_results_matrix,
    judges_in_scope,
    results_for_scope,
    tier_for_position,
)
from jurycore.apps.registration.models import Category
from jurycore.apps.scoring.services.records import record_score
from jurycore.apps.selections.scopes import top_scope
from jurycore.apps.selections.services.lifecycle import finalize_scope, select_for_scope


def rec(submission_id, judge_id, s1, s2=None, s3=None, s4=None, pk=None):
    s2 = s1 if s2 is None else s2
    s3 = s1 if s3 is None else s3
    s4 = s1 if s4 is None else s4
    return SimpleNamespace(
        pk=pk, submission_id=submission_id, judge_id=judge_id,
        score1=s1, score2=s2, score3=s3, score4=s4, comments="",
    )


class BuildResultsMatrixTest(SimpleTestCase):
    judges = [JudgeRef(1, "Ana"), JudgeRef(2, "Beto")]

    def test_nulls_last_regardless_of_input_order(self):
        subs = [RankedSubmission(10, "A"), RankedSubmission(20, "B"), RankedSubmission(30, "C")]
        records = [
            rec(10, 1, 10), rec(10, 2, 8),    # 100, 80 -> 90
            rec(30, 1, 9), rec(30, 2, 8),     # 90, 80 -> 85
        ]
        results = build_results_matrix(subs, self.judges, records)
        self.assertEqual([r.submission.submission_id for r in results], [10, 30, 20])
        self.assertEqual([r.average for r in results], [90.0, 85.0, None])

    def test_missing_pairs_are_none_not_zero(self):
        subs = [RankedSubmission(10)]
        results = build_results_matrix(subs, self.judges, [rec(10, 2, 7)])
        entry = results[0]
        self.assertIsNone(entry.scores[0])
        self.assertEqual(entry.totals, [None, 70])
        self.assertEqual(entry.average, 70.0)

    def test_ties_keep_selection_order(self):
        subs = [RankedSubmission(i, selection_rank=rank) for rank, i in enumerate((5, 3, 9), start=1)]
        records = [rec(5, 1, 6), rec(3, 1, 6), rec(9, 1, 6)]
        results = build_results_matrix(subs, self.judges, records)
        self.assertEqual([r.submission.submission_id for r in results], [5, 3, 9])

    def test_unscored_submission_still_returned(self):
        results = build_results_matrix([RankedSubmission(10)], [], [])
        self.assertEqual(len(results), 1)
        self.assertIsNone(results[0].average)

    def test_tiers_by_position(self):
        self.assertEqual(
            [tier_for_position(i) for i in range(5)],
            ["gold", "silver", "bronze", "ordinal", "ordinal"],
        )
        subs = [RankedSubmission(i) for i in range(1, 5)]
        records = [rec(i, 1, i + 2) for i in range(1, 5)]
        results = build_results_matrix(subs, self.judges, records)
        self.assertEqual([r.submission.submission_id for r in results], [4, 3, 2, 1])
        self.assertEqual([r.tier for r in results], ["gold", "silver", "bronze", "ordinal"])
        self.assertEqual([r.position for r in results], [0, 1, 2, 3])

    def test_weighted_totals_per_judge(self):
        results = build_results_matrix([RankedSubmission(1)], self.judges, [rec(1, 1, 10, 5, 1, 1, pk=77)])
        score = results[0].scores[0]
        self.assertEqual(score.weighted_total, 40 + 15 + 2 + 1)
        self.assertEqual(score.as_dict()["scoreId"], 77)


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class ResultsForScopeTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cat = Category.objects.create(name="Arquitectura")
        cls.a = make_submission(cat, "AR-001", "Pabellón")
        cls.b = make_submission(cat, "AR-002", "Puente")
        cls.c = make_submission(cat, "AR-003", "Plaza")
        cls.admin_judge = make_judge(ADMIN_CODE, "Zoe Admin")
        cls.admin = Actor.from_judge(cls.admin_judge)
        cls.j1 = make_judge("J01", "Bruno Vega", pin="1111")
        cls.j2 = make_judge("J02", "Ana Mora", pin="2222")
        cls.j3 = make_judge("J03", "Carlos Ruiz", pin="3333")
        make_judge("J04", "Sin Puntajes", pin="4444")

    def _score(self, judge, sub, total_per_criterion):
        v = total_per_criterion
        result = record_score(self.admin, judge.pk, sub.pk, "top5", {"score1": v, "score2": v, "score3": v, "score4": v})
        self.assertTrue(result.ok)

    def test_end_to_end_gold(self):
        select_for_scope(self.admin, "top5", [self.b.pk, self.a.pk, self.c.pk])
        # a: 100, 80, 90 -> 90.00
        self._score(self.j1, self.a, 10)
        self._score(self.j2, self.a, 8)
        self._score(self.j3, self.a, 9)
        # b: 70 -> 70.00 ; c sin puntajes
        self._score(self.j1, self.b, 7)

        data = results_for_scope(self.admin, "top5")
        self.assertTrue(data.ok)
        self.assertEqual([j["name"] for j in data["judges"]], ["Ana Mora", "Bruno Vega", "Carlos Ruiz"])

        results = data["results"]
        self.assertEqual([r["submissionId"] for r in results], [self.a.pk, self.b.pk, self.c.pk])
        top = results[0]
        self.assertEqual(top["averageScore"], 90.0)
        self.assertEqual(top["tier"], "gold")
        self.assertEqual(top["selectionRank"], 2)
        self.assertEqual(top["totals"], [80, 100, 90])
        self.assertIsNone(results[2]["averageScore"])
        self.assertEqual([r["state"] for r in results], ["Scored", "Scored", "Selected"])

        finalize_scope(self.admin, "top5")
        data = results_for_scope(self.admin, "top5")
        self.assertTrue(data["finalized"])
        self.assertEqual({r["state"] for r in data["results"]}, {"Finalized"})

    def test_judges_in_scope_only_with_scores(self):
        self._score(self.j3, self.a, 5)
        self.assertEqual([j.name for j in judges_in_scope(top_scope())], ["Carlos Ruiz"])

    def test_results_require_admin(self):
        result = results_for_scope(Actor.from_judge(self.j1), "top5")
        self.assertEqual(result.error_code, "UNAUTHORIZED")

    def test_results_page_and_api(self):
        select_for_scope(self.admin, "top5", [self.a.pk])
        self._score(self.j1, self.a, 10)
        login_as(self.client, self.admin_judge)
        r = self.client.get("/jury-admin/results/top5/")
        self.assertEqual(r.status_code, 200)
        self.assertContains(r, "Pabellón")
        r = self.client.get("/api/results/top5/")
        self.assertEqual(r.status_code, 200)
        self.assertEqual(r.json()["results"][0]["averageScore"], 100.0)
        self.assertEqual(self.client.get("/api/results/nope/").status_code, 400)

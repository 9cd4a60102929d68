import json

from django.test import TestCase, override_settings

from jurycore.apps.accounts.context import Actor
from jurycore.apps.core.testing import FAST_HASHERS, login_as, make_judge, make_submission
from jurycore.apps.judging.models import JuryEvaluation
from jurycore.apps.judging.services import (
    finalize_evaluations,
    list_submissions_for_judge,
    save_evaluation,
    selected_submissions,
)
from jurycore.apps.registration.models import Category

SCORES = {"score1": 8, "score2": 7, "score3": 6, "score4": 5}


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class EvaluationServicesTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.cat = Category.objects.create(name="Gráfica")
        cls.subs = [make_submission(cls.cat, f"GR-{i:03d}") for i in range(1, 13)]
        cls.draft = make_submission(cls.cat, "GR-900", status="DRAFT")
        cls.checker = make_judge("J01", "Carla Díaz", pin="1111", method="checkbox")
        cls.scorer = make_judge("J02", "Diego Soto", pin="2222", method="scoring")
        cls.undecided = make_judge("J03", "Eva Luna", pin="3333")

    def setUp(self):
        self.checker_actor = Actor.from_judge(self.checker)
        self.scorer_actor = Actor.from_judge(self.scorer)

    def test_requires_method(self):
        result = save_evaluation(Actor.from_judge(self.undecided), self.subs[0].pk, selected=True)
        self.assertEqual(result.error_code, "MISSING_REQUIRED_FIELD")

    def test_checkbox_upsert_and_remove(self):
        save_evaluation(self.checker_actor, self.subs[0].pk, selected=True, comments="  linda  ")
        save_evaluation(self.checker_actor, self.subs[0].pk, selected=False, comments="cambio")
        ev = JuryEvaluation.objects.get()
        self.assertFalse(ev.selected)
        self.assertEqual(ev.comments, "cambio")
        self.assertIsNone(ev.raw_scores)

        result = save_evaluation(self.checker_actor, self.subs[0].pk, remove=True)
        self.assertTrue(result["removed"])
        self.assertFalse(JuryEvaluation.objects.exists())

    def test_scoring_validates_scores(self):
        bad = save_evaluation(self.scorer_actor, self.subs[0].pk, selected=True, scores={**SCORES, "score3": 0})
        self.assertEqual(bad.error_code, "INVALID_SCORE_RANGE")
        missing = save_evaluation(self.scorer_actor, self.subs[0].pk, selected=True, scores=None)
        self.assertEqual(missing.error_code, "MISSING_REQUIRED_FIELD")
        ok = save_evaluation(self.scorer_actor, self.subs[0].pk, selected=True, scores=SCORES)
        self.assertTrue(ok.ok)
        self.assertEqual(ok["evaluation"]["weightedTotal"], 8 * 4 + 7 * 3 + 6 * 2 + 5)

    def test_non_eligible_submission(self):
        result = save_evaluation(self.checker_actor, self.draft.pk, selected=True)
        self.assertEqual(result.error_code, "NOT_FOUND")

    def test_listing_embeds_own_evaluation_only(self):
        save_evaluation(self.checker_actor, self.subs[0].pk, selected=True)
        save_evaluation(self.scorer_actor, self.subs[1].pk, selected=True, scores=SCORES)
        data = list_submissions_for_judge(self.checker_actor)
        self.assertEqual(len(data["submissions"]), 12)
        evaluated = [s["id"] for s in data["submissions"] if s["evaluated"]]
        self.assertEqual(evaluated, [self.subs[0].pk])
        self.assertEqual(data["evaluatedCount"], 1)
        # más nuevas primero
        self.assertEqual(data["submissions"][0]["id"], self.subs[-1].pk)

    def test_selected_sorted_by_total_in_scoring(self):
        save_evaluation(self.scorer_actor, self.subs[0].pk, selected=True, scores={"score1": 1, "score2": 1, "score3": 1, "score4": 1})
        save_evaluation(self.scorer_actor, self.subs[1].pk, selected=True, scores=SCORES)
        save_evaluation(self.scorer_actor, self.subs[2].pk, selected=False, scores=SCORES)
        data = selected_submissions(self.scorer_actor)
        self.assertEqual([s["id"] for s in data["submissions"]], [self.subs[1].pk, self.subs[0].pk])

    def test_finalize(self):
        for sub in self.subs[:3]:
            save_evaluation(self.checker_actor, sub.pk, selected=True)
        result = finalize_evaluations(self.checker_actor, [self.subs[0].pk, self.subs[1].pk])
        self.assertEqual(result["finalized"], 2)
        self.assertEqual(JuryEvaluation.objects.filter(is_finalized=True).count(), 2)

    def test_finalize_rules(self):
        self.assertEqual(finalize_evaluations(self.checker_actor, []).error_code, "MISSING_REQUIRED_FIELD")
        too_many = [s.pk for s in self.subs[:11]]
        self.assertEqual(finalize_evaluations(self.checker_actor, too_many).error_code, "SELECTION_LIMIT_EXCEEDED")
        # sin selección previa: no se finaliza nada
        save_evaluation(self.checker_actor, self.subs[0].pk, selected=True)
        result = finalize_evaluations(self.checker_actor, [self.subs[0].pk, self.subs[1].pk])
        self.assertEqual(result.error_code, "NOT_FOUND")
        self.assertFalse(JuryEvaluation.objects.filter(is_finalized=True).exists())


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class JudgePagesTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cat = Category.objects.create(name="Gráfica")
        cls.sub = make_submission(cat, "GR-001")
        cls.scorer = make_judge("J02", "Diego Soto", pin="2222", method="scoring")
        cls.checker = make_judge("J01", "Carla Díaz", pin="1111", method="checkbox")
        cls.undecided = make_judge("J03", "Eva Luna", pin="3333")

    def test_login_required(self):
        r = self.client.get("/submissions/")
        self.assertEqual(r.status_code, 302)
        self.assertIn("/login/", r["Location"])

    def test_method_required(self):
        login_as(self.client, self.undecided)
        r = self.client.get("/submissions/")
        self.assertRedirects(r, "/evaluation-method/", fetch_redirect_response=False)

    def test_submit_scores_from_page(self):
        login_as(self.client, self.scorer)
        self.assertEqual(self.client.get("/submissions/").status_code, 200)
        r = self.client.post("/submissions/", {"submission_id": self.sub.pk, "selected": "on", **SCORES})
        self.assertEqual(r.status_code, 302)
        ev = JuryEvaluation.objects.get()
        self.assertEqual(ev.raw_scores, [8, 7, 6, 5])
        self.assertTrue(ev.selected)
        self.assertEqual(self.client.get("/review-selections/").status_code, 200)
        self.client.post("/review-selections/", {"submission_ids": [self.sub.pk]})
        ev.refresh_from_db()
        self.assertTrue(ev.is_finalized)

    def test_api_flow(self):
        login_as(self.client, self.scorer)
        r = self.client.post(
            "/api/submissions/",
            data=json.dumps({"submissionId": self.sub.pk, "selected": True, "scores": SCORES}),
            content_type="application/json",
        )
        self.assertEqual(r.status_code, 200)
        r = self.client.get("/api/submissions/selected/")
        self.assertEqual(len(r.json()["submissions"]), 1)
        r = self.client.post(
            "/api/submissions/finalize/",
            data=json.dumps({"submissionIds": [self.sub.pk]}),
            content_type="application/json",
        )
        self.assertEqual(r.json()["finalized"], 1)

    def test_api_text_flags_are_parsed(self):
        login_as(self.client, self.checker)

        def post(payload):
            return self.client.post("/api/submissions/", data=json.dumps(payload), content_type="application/json")

        r = post({"submissionId": self.sub.pk, "selected": "false"})
        self.assertEqual(r.status_code, 200)
        self.assertFalse(JuryEvaluation.objects.get().selected)

        post({"submissionId": self.sub.pk, "selected": "true", "remove": "false"})
        self.assertTrue(JuryEvaluation.objects.get().selected)

        post({"submissionId": self.sub.pk, "remove": "0"})
        self.assertTrue(JuryEvaluation.objects.exists())
        post({"submissionId": self.sub.pk, "remove": True})
        self.assertFalse(JuryEvaluation.objects.exists())

import json

from django.test import TestCase, override_settings

from jurycore.apps.accounts.context import Actor
from jurycore.apps.core.testing import ADMIN_CODE, FAST_HASHERS, login_as, make_judge, make_submission
from jurycore.apps.registration.models import Category
from jurycore.apps.scoring.models import ScoreRecord
from jurycore.apps.scoring.services.records import delete_score, record_score, scores_overview

SCORES_A = {"score1": 10, "score2": 10, "score3": 10, "score4": 10}
SCORES_B = {"score1": 5, "score2": 6, "score3": 7, "score4": 8}


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class RecordScoreTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cls.cat = Category.objects.create(name="Producto")
        cls.sub = make_submission(cls.cat, "PR-001")
        cls.admin = make_judge(ADMIN_CODE, "Admin Jurado")
        cls.ana = make_judge("J01", "Ana Pérez", pin="1111", method="scoring")
        cls.beto = make_judge("J02", "Beto Ruiz", pin="2222", method="scoring")
        cls.admin_actor = Actor.from_judge(cls.admin)
        cls.ana_actor = Actor.from_judge(cls.ana)

    def test_second_call_updates_same_record(self):
        first = record_score(self.ana_actor, self.ana.pk, self.sub.pk, "top5", SCORES_A, "bien")
        second = record_score(self.ana_actor, self.ana.pk, self.sub.pk, "top5", SCORES_B, "mejor")
        self.assertTrue(first.ok and second.ok)
        self.assertTrue(first["created"])
        self.assertFalse(second["created"])
        self.assertEqual(ScoreRecord.objects.count(), 1)
        rec = ScoreRecord.objects.get()
        self.assertEqual(rec.raw_scores, [5, 6, 7, 8])
        self.assertEqual(rec.comments, "mejor")
        self.assertEqual(rec.weighted_total, 5 * 4 + 6 * 3 + 7 * 2 + 8)

    def test_scopes_are_independent(self):
        record_score(self.ana_actor, None, self.sub.pk, "top5", SCORES_A)
        record_score(self.ana_actor, None, self.sub.pk, f"general:{self.cat.pk}", SCORES_B)
        self.assertEqual(ScoreRecord.objects.count(), 2)

    def test_invalid_range_not_persisted(self):
        result = record_score(self.ana_actor, self.ana.pk, self.sub.pk, "top5", {**SCORES_A, "score2": 11})
        self.assertFalse(result.ok)
        self.assertEqual(result.error_code, "INVALID_SCORE_RANGE")
        self.assertFalse(ScoreRecord.objects.exists())

    def test_missing_fields(self):
        self.assertEqual(record_score(self.ana_actor, None, None, "top5", SCORES_A).error_code, "MISSING_REQUIRED_FIELD")
        self.assertEqual(record_score(self.ana_actor, None, self.sub.pk, "", SCORES_A).error_code, "INVALID_SCOPE")
        self.assertEqual(record_score(self.ana_actor, None, self.sub.pk, "top5", None).error_code, "MISSING_REQUIRED_FIELD")

    def test_malformed_input_is_a_domain_error(self):
        result = record_score(self.ana_actor, None, self.sub.pk, "top5", {**SCORES_A, "score1": "--5"})
        self.assertEqual(result.error_code, "INVALID_SCORE_RANGE")
        result = record_score(self.ana_actor, None, float("inf"), "top5", SCORES_A)
        self.assertEqual(result.error_code, "MISSING_REQUIRED_FIELD")
        self.assertFalse(ScoreRecord.objects.exists())

    def test_unknown_submission_and_category(self):
        self.assertEqual(record_score(self.ana_actor, None, 9999, "top5", SCORES_A).error_code, "NOT_FOUND")
        self.assertEqual(record_score(self.ana_actor, None, self.sub.pk, "general:9999", SCORES_A).error_code, "NOT_FOUND")

    def test_roles(self):
        self.assertEqual(record_score(None, None, self.sub.pk, "top5", SCORES_A).error_code, "UNAUTHORIZED")
        # Un jurado no puede puntuar por otro; el admin sí
        self.assertEqual(record_score(self.ana_actor, self.beto.pk, self.sub.pk, "top5", SCORES_A).error_code, "UNAUTHORIZED")
        result = record_score(self.admin_actor, self.beto.pk, self.sub.pk, "top5", SCORES_A)
        self.assertTrue(result.ok)
        self.assertEqual(ScoreRecord.objects.get().judge_id, self.beto.pk)


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class DeleteScoreTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cat = Category.objects.create(name="Producto")
        cls.sub = make_submission(cat, "PR-001")
        cls.admin = make_judge(ADMIN_CODE, "Admin Jurado")
        cls.ana = make_judge("J01", "Ana Pérez", pin="1111")
        cls.rec = ScoreRecord.objects.create(
            judge=cls.ana, submission=cls.sub, scope="top5", score1=5, score2=5, score3=5, score4=5
        )

    def test_delete_then_not_found(self):
        actor = Actor.from_judge(self.admin)
        self.assertTrue(delete_score(actor, self.rec.pk).ok)
        self.assertFalse(ScoreRecord.objects.exists())
        again = delete_score(actor, self.rec.pk)
        self.assertEqual(again.error_code, "NOT_FOUND")

    def test_unknown_id_leaves_store_unchanged(self):
        result = delete_score(Actor.from_judge(self.admin), 424242)
        self.assertEqual(result.error_code, "NOT_FOUND")
        self.assertEqual(ScoreRecord.objects.count(), 1)

    def test_requires_admin(self):
        result = delete_score(Actor.from_judge(self.ana), self.rec.pk)
        self.assertEqual(result.error_code, "UNAUTHORIZED")
        self.assertEqual(ScoreRecord.objects.count(), 1)

    def test_overview_groups_by_submission(self):
        data = scores_overview(Actor.from_judge(self.admin), "top5")
        self.assertTrue(data.ok)
        entry = data["submissions"][0]
        self.assertEqual(entry["id"], self.sub.pk)
        self.assertEqual(entry["scores"][0]["judgeName"], "Ana Pérez")
        self.assertEqual(entry["scores"][0]["weightedTotal"], 50)


@override_settings(PASSWORD_HASHERS=FAST_HASHERS)
class ScoreApiTest(TestCase):
    @classmethod
    def setUpTestData(cls):
        cat = Category.objects.create(name="Producto")
        cls.sub = make_submission(cat, "PR-001")
        cls.admin = make_judge(ADMIN_CODE, "Admin Jurado")
        cls.ana = make_judge("J01", "Ana Pérez", pin="1111")

    def _post(self, payload):
        return self.client.post("/api/scores/", data=json.dumps(payload), content_type="application/json")

    def test_requires_session(self):
        r = self._post({"submissionId": self.sub.pk, "scope": "top5", "scores": SCORES_A})
        self.assertEqual(r.status_code, 401)
        self.assertEqual(r.json()["error"], "UNAUTHORIZED")

    def test_create_update_delete(self):
        login_as(self.client, self.admin)
        r = self._post({"judgeId": self.ana.pk, "submissionId": self.sub.pk, "scope": "top5", "scores": SCORES_A})
        self.assertEqual(r.status_code, 201)
        self.assertEqual(r.json()["score"]["weightedTotal"], 100)

        r = self._post({"judgeId": self.ana.pk, "submissionId": self.sub.pk, "scope": "top5", **SCORES_B})
        self.assertEqual(r.status_code, 200)
        score_id = r.json()["score"]["id"]

        r = self.client.delete(f"/api/scores/{score_id}/")
        self.assertEqual(r.status_code, 200)
        r = self.client.delete(f"/api/scores/{score_id}/")
        self.assertEqual(r.status_code, 404)
        self.assertEqual(r.json()["error"], "NOT_FOUND")

    def test_range_error_is_400(self):
        login_as(self.client, self.ana)
        r = self._post({"submissionId": self.sub.pk, "scope": "top5", "scores": {**SCORES_A, "score1": 0}})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "INVALID_SCORE_RANGE")

    def test_overview_admin_only(self):
        login_as(self.client, self.ana)
        self.assertEqual(self.client.get("/api/scores/top5/").status_code, 401)
        login_as(self.client, self.admin)
        r = self.client.get("/api/scores/top5/")
        self.assertEqual(r.status_code, 200)
        self.assertTrue(r.json()["success"])

    def test_malformed_numbers_are_400(self):
        login_as(self.client, self.ana)
        r = self._post({"submissionId": self.sub.pk, "scope": "top5", "scores": {**SCORES_A, "score1": "²"}})
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "INVALID_SCORE_RANGE")

        body = '{"submissionId": Infinity, "scope": "top5", "scores": [5, 5, 5, 5]}'
        r = self.client.post("/api/scores/", data=body, content_type="application/json")
        self.assertEqual(r.status_code, 400)
        self.assertEqual(r.json()["error"], "MISSING_REQUIRED_FIELD")
        self.assertFalse(ScoreRecord.objects.exists())

    def test_admin_panel_saves_through_form(self):
        login_as(self.client, self.admin)
        url = "/jury-admin/scores/top5/"
        r = self.client.post(url, {
            "judge": self.ana.pk, "submission": self.sub.pk,
            "score1": "9", "score2": "8", "score3": "7", "score4": "6", "comments": "ok",
        })
        self.assertEqual(r.status_code, 302)
        rec = ScoreRecord.objects.get()
        self.assertEqual(rec.raw_scores, [9, 8, 7, 6])
        self.assertEqual(rec.judge_id, self.ana.pk)

        r = self.client.post(url, {
            "judge": self.ana.pk, "submission": self.sub.pk,
            "score1": "11", "score2": "8", "score3": "7", "score4": "6",
        })
        self.assertEqual(r.status_code, 200)
        self.assertEqual(ScoreRecord.objects.get().raw_scores, [9, 8, 7, 6])

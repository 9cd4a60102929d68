# jurycore/apps/scoring/models.py
from __future__ import annotations

from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.db.models import Q
from django.utils import timezone

from .services.weights import MAX_SCORE, MIN_SCORE, compute_weighted_total

_score_validators = [MinValueValidator(MIN_SCORE), MaxValueValidator(MAX_SCORE)]


class ScoreRecord(models.Model):
    """
    Evaluación final de un jurado sobre una postulación dentro de un ámbito.
    Una sola fila por (jurado, postulación, ámbito): guardar de nuevo actualiza.
    El total ponderado no se guarda; se recalcula al leer.
    """
    judge = models.ForeignKey("accounts.Judge", on_delete=models.CASCADE, related_name="score_records")
    submission = models.ForeignKey("registration.Submission", on_delete=models.CASCADE, related_name="score_records")
    scope = models.CharField(max_length=32, db_index=True)

    score1 = models.PositiveSmallIntegerField(validators=_score_validators)
    score2 = models.PositiveSmallIntegerField(validators=_score_validators)
    score3 = models.PositiveSmallIntegerField(validators=_score_validators)
    score4 = models.PositiveSmallIntegerField(validators=_score_validators)
    comments = models.TextField(blank=True, default="")

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("scope", "submission_id", "judge__full_name")
        constraints = [
            models.UniqueConstraint(fields=["judge", "submission", "scope"], name="uniq_score_judge_submission_scope"),
            *[
                models.CheckConstraint(
                    condition=Q(**{f"{f}__gte": MIN_SCORE, f"{f}__lte": MAX_SCORE}),
                    name=f"scorerecord_{f}_range",
                )
                for f in ("score1", "score2", "score3", "score4")
            ],
        ]

    def __str__(self) -> str:
        return f"{self.scope} · {self.submission_id} · {self.judge_id} = {self.weighted_total}"

    @property
    def raw_scores(self) -> list[int]:
        return [self.score1, self.score2, self.score3, self.score4]

    @property
    def weighted_total(self) -> int:
        return compute_weighted_total(*self.raw_scores)

    def as_dict(self) -> dict:
        return {
            "id": self.pk,
            "judgeId": self.judge_id,
            "submissionId": self.submission_id,
            "scope": self.scope,
            "score1": self.score1,
            "score2": self.score2,
            "score3": self.score3,
            "score4": self.score4,
            "comments": self.comments or "",
            "weightedTotal": self.weighted_total,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

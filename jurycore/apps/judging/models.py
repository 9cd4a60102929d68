# jurycore/apps/judging/models.py
from __future__ import annotations

from django.db import models
from django.utils import timezone

from jurycore.apps.accounts.models import EVALUATION_METHOD_CHOICES
from jurycore.apps.scoring.services.weights import compute_weighted_total


class JuryEvaluation(models.Model):
    """
    Primera pasada de un jurado sobre una postulación: marca de selección
    (método checkbox) o cuatro puntajes (método scoring), más comentario.
    Una fila por (jurado, postulación).
    """
    judge = models.ForeignKey("accounts.Judge", on_delete=models.CASCADE, related_name="evaluations")
    submission = models.ForeignKey("registration.Submission", on_delete=models.CASCADE, related_name="evaluations")
    evaluation_method = models.CharField(max_length=16, choices=EVALUATION_METHOD_CHOICES)

    selected = models.BooleanField(default=False)
    score1 = models.PositiveSmallIntegerField(null=True, blank=True)
    score2 = models.PositiveSmallIntegerField(null=True, blank=True)
    score3 = models.PositiveSmallIntegerField(null=True, blank=True)
    score4 = models.PositiveSmallIntegerField(null=True, blank=True)
    comments = models.TextField(blank=True, default="")

    is_finalized = models.BooleanField(default=False)
    finalized_at = models.DateTimeField(null=True, blank=True)

    created_at = models.DateTimeField(default=timezone.now, editable=False)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ("judge_id", "-updated_at")
        constraints = [
            models.UniqueConstraint(fields=["judge", "submission"], name="uniq_evaluation_judge_submission"),
        ]

    def __str__(self) -> str:
        return f"{self.judge_id} → {self.submission_id} ({self.evaluation_method})"

    @property
    def raw_scores(self):
        scores = [self.score1, self.score2, self.score3, self.score4]
        return scores if all(s is not None for s in scores) else None

    @property
    def weighted_total(self):
        scores = self.raw_scores
        return compute_weighted_total(*scores) if scores else None

    def as_dict(self) -> dict:
        scores = self.raw_scores
        return {
            "id": self.pk,
            "submissionId": self.submission_id,
            "evaluationMethod": self.evaluation_method,
            "selected": self.selected,
            "scores": dict(zip(("score1", "score2", "score3", "score4"), scores)) if scores else None,
            "weightedTotal": self.weighted_total,
            "comments": self.comments or "",
            "isFinalized": self.is_finalized,
            "finalizedAt": self.finalized_at.isoformat() if self.finalized_at else None,
        }

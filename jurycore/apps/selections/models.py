# jurycore/apps/selections/models.py
from __future__ import annotations

from django.db import models
from django.utils import timezone


class Selection(models.Model):
    """
    Postulación elegida dentro de un ámbito, con su posición (1..N).
    El conjunto de un ámbito se reemplaza completo (ver services.lifecycle).
    """
    scope = models.CharField(max_length=32, db_index=True)
    submission = models.ForeignKey("registration.Submission", on_delete=models.CASCADE, related_name="selections")
    rank = models.PositiveSmallIntegerField()
    created_by = models.ForeignKey(
        "accounts.Judge", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )
    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        ordering = ("scope", "rank")
        constraints = [
            models.UniqueConstraint(fields=["scope", "submission"], name="uniq_selection_scope_submission"),
            models.UniqueConstraint(fields=["scope", "rank"], name="uniq_selection_scope_rank"),
        ]

    def __str__(self) -> str:
        return f"{self.scope} #{self.rank} · {self.submission_id}"


class ScopeFinalization(models.Model):
    """Marca explícita de cierre de un ámbito (una fila por ámbito)."""
    scope = models.CharField(max_length=32, unique=True)
    finalized_at = models.DateTimeField(default=timezone.now)
    finalized_by = models.ForeignKey(
        "accounts.Judge", on_delete=models.SET_NULL, null=True, blank=True, related_name="+"
    )

    class Meta:
        ordering = ("scope",)

    def __str__(self) -> str:
        return f"{self.scope} finalizado {self.finalized_at:%Y-%m-%d %H:%M}"

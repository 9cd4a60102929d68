# jurycore/apps/accounts/models.py
from __future__ import annotations

from django.conf import settings
from django.contrib.auth.hashers import check_password, make_password
from django.db import models
from django.utils import timezone

METHOD_CHECKBOX = "checkbox"
METHOD_SCORING = "scoring"

EVALUATION_METHOD_CHOICES = (
    (METHOD_CHECKBOX, "Selección (checkbox)"),
    (METHOD_SCORING, "Puntuación"),
)


class Judge(models.Model):
    """
    Jurado del concurso. Entra con un PIN (guardado con hash).
    El jurado cuyo código coincide con settings.JURY_ADMIN_CODE es administrador.
    """
    code = models.CharField("Código", max_length=16, unique=True)
    full_name = models.CharField("Nombre completo", max_length=160)
    pin_hash = models.CharField(max_length=128, editable=False)
    is_active = models.BooleanField(default=True)

    # Se define una sola vez; después es inmutable (ver services.choose_evaluation_method)
    evaluation_method = models.CharField(
        max_length=16, choices=EVALUATION_METHOD_CHOICES, null=True, blank=True
    )
    evaluation_method_set_at = models.DateTimeField(null=True, blank=True, editable=False)

    created_at = models.DateTimeField(default=timezone.now, editable=False)

    class Meta:
        ordering = ("full_name", "id")

    def __str__(self) -> str:
        return self.full_name or self.code

    @property
    def is_admin(self) -> bool:
        return self.code == settings.JURY_ADMIN_CODE

    def set_pin(self, raw_pin: str) -> None:
        self.pin_hash = make_password(raw_pin)

    def check_pin(self, raw_pin: str) -> bool:
        return bool(self.pin_hash) and check_password(raw_pin, self.pin_hash)

# jurycore/apps/registration/models.py
from __future__ import annotations

from django.core.exceptions import ValidationError
from django.db import models
from django.utils import timezone
from django.utils.text import slugify

STATUS_DRAFT = "DRAFT"
STATUS_SUBMITTED = "SUBMITTED"

STATUS_CHOICES = (
    (STATUS_DRAFT, "Borrador"),
    (STATUS_SUBMITTED, "Enviada"),
    ("WITHDRAWN", "Retirada"),
)

TYPE_CHOICES = (
    ("INDIVIDUAL", "Individual"),
    ("TEAM", "Equipo"),
)


class Category(models.Model):
    name = models.CharField(max_length=160, unique=True)
    slug = models.SlugField(unique=True)
    is_active = models.BooleanField(default=True)

    class Meta:
        ordering = ("name", "id")
        verbose_name_plural = "categories"

    def __str__(self) -> str:
        return self.name

    def save(self, *args, **kwargs):
        if not self.slug:
            self.slug = slugify(self.name)
        super().save(*args, **kwargs)


class SubmissionQuerySet(models.QuerySet):
    def eligible(self):
        """Postulaciones evaluables: enviadas, activas y de categorías activas."""
        return self.filter(status=STATUS_SUBMITTED, is_active=True, category__is_active=True)

    def in_category(self, category_id):
        if category_id in (None, "", "all"):
            return self
        try:
            return self.filter(category_id=int(category_id))
        except (TypeError, ValueError):
            return self.none()


class Submission(models.Model):
    """
    Postulación al concurso. Solo lectura para el núcleo de evaluación:
    la carga viene del importador o del admin de Django.
    """
    category = models.ForeignKey(Category, on_delete=models.PROTECT, related_name="submissions")
    title = models.CharField(max_length=200)
    description = models.TextField(blank=True, default="")
    # Código legible (ej. "DC-2025-014")
    submission_number = models.CharField(max_length=32, unique=True)
    submission_type = models.CharField(max_length=16, choices=TYPE_CHOICES, default="INDIVIDUAL")
    # Referencias a archivos (URLs o rutas de almacenamiento)
    files = models.JSONField(default=list, blank=True)

    status = models.CharField(max_length=16, choices=STATUS_CHOICES, default=STATUS_SUBMITTED)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(default=timezone.now)

    objects = SubmissionQuerySet.as_manager()

    class Meta:
        ordering = ("-created_at", "id")

    def __str__(self) -> str:
        return f"{self.submission_number} · {self.title}"

    def clean(self):
        if not isinstance(self.files, list) or not all(isinstance(f, str) for f in self.files):
            raise ValidationError({"files": "Debe ser una lista de referencias (texto)."})

    def as_dict(self) -> dict:
        return {
            "id": self.pk,
            "title": self.title,
            "description": self.description or "",
            "submissionNumber": self.submission_number,
            "submissionType": self.submission_type,
            "categoryId": self.category_id,
            "categoryName": self.category.name,
            "status": self.status,
            "submittedAt": self.created_at.isoformat(),
            "submissionFiles": list(self.files or []),
        }

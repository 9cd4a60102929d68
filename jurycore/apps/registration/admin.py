from __future__ import annotations

from django.contrib import admin, messages
from django.utils.translation import gettext_lazy as _

from .models import Category, Submission


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "slug", "is_active", "submissions_count")
    list_filter = ("is_active",)
    search_fields = ("name", "slug")
    prepopulated_fields = {"slug": ("name",)}

    def submissions_count(self, obj: Category) -> int:
        return obj.submissions.count()
    submissions_count.short_description = "Postulaciones"


@admin.register(Submission)
class SubmissionAdmin(admin.ModelAdmin):
    list_display = ("submission_number", "title", "category", "submission_type", "status", "is_active", "created_at")
    list_filter = ("category", "status", "is_active", "submission_type")
    search_fields = ("submission_number", "title", "description")
    ordering = ("-created_at",)
    actions = ["action_activate", "action_deactivate"]

    @admin.action(description=_("Activar postulaciones seleccionadas"))
    def action_activate(self, request, queryset):
        updated = queryset.update(is_active=True)
        self.message_user(request, f"{updated} postulaciones activadas.", level=messages.SUCCESS)

    @admin.action(description=_("Desactivar postulaciones seleccionadas"))
    def action_deactivate(self, request, queryset):
        updated = queryset.update(is_active=False)
        self.message_user(request, f"{updated} postulaciones desactivadas.", level=messages.SUCCESS)

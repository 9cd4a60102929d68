from __future__ import annotations

from django.contrib import admin

from .models import JuryEvaluation


@admin.register(JuryEvaluation)
class JuryEvaluationAdmin(admin.ModelAdmin):
    list_display = ("submission", "judge", "evaluation_method", "selected", "weighted_total_display", "is_finalized", "updated_at")
    list_filter = ("evaluation_method", "selected", "is_finalized", "judge")
    search_fields = ("submission__title", "submission__submission_number", "judge__full_name")
    list_select_related = ("submission", "judge")
    readonly_fields = ("created_at", "updated_at", "finalized_at")

    def weighted_total_display(self, obj: JuryEvaluation):
        return obj.weighted_total
    weighted_total_display.short_description = "Total"

from __future__ import annotations

from django.contrib import admin

from .models import ScoreRecord


@admin.register(ScoreRecord)
class ScoreRecordAdmin(admin.ModelAdmin):
    list_display = ("submission", "judge", "scope", "score1", "score2", "score3", "score4", "weighted_total_display", "updated_at")
    list_filter = ("scope", "judge")
    search_fields = ("submission__title", "submission__submission_number", "judge__full_name")
    list_select_related = ("submission", "judge")
    readonly_fields = ("created_at", "updated_at")

    def weighted_total_display(self, obj: ScoreRecord) -> int:
        return obj.weighted_total
    weighted_total_display.short_description = "Total"

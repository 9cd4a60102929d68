from __future__ import annotations

from django.contrib import admin

from .models import ScopeFinalization, Selection


@admin.register(Selection)
class SelectionAdmin(admin.ModelAdmin):
    list_display = ("scope", "rank", "submission", "created_by", "created_at")
    list_filter = ("scope",)
    search_fields = ("submission__title", "submission__submission_number")
    list_select_related = ("submission", "created_by")
    ordering = ("scope", "rank")


@admin.register(ScopeFinalization)
class ScopeFinalizationAdmin(admin.ModelAdmin):
    list_display = ("scope", "finalized_at", "finalized_by")

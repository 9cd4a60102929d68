from django.contrib import admin

from .forms import JudgeAdminForm
from .models import Judge


@admin.register(Judge)
class JudgeAdmin(admin.ModelAdmin):
    form = JudgeAdminForm
    list_display = ("code", "full_name", "is_active", "evaluation_method", "is_admin_display", "created_at")
    list_filter = ("is_active", "evaluation_method")
    search_fields = ("code", "full_name")
    readonly_fields = ("evaluation_method_set_at", "created_at")

    @admin.display(boolean=True, description="Admin")
    def is_admin_display(self, obj: Judge) -> bool:
        return obj.is_admin

from django.contrib import admin

from .models import Assignment


@admin.register(Assignment)
class AssignmentAdmin(admin.ModelAdmin):
    list_display = ("title", "course", "owner", "due_date", "priority", "status", "completion_percentage")
    list_filter = ("status", "priority", "course")
    search_fields = ("title", "course__name", "course__code", "owner__username")
    readonly_fields = ("created_at", "updated_at", "completed_at")

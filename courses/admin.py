from django.contrib import admin

from .models import Course


@admin.register(Course)
class CourseAdmin(admin.ModelAdmin):
    list_display = ("code", "name", "owner", "semester", "credits", "created_at")
    list_filter = ("semester",)
    search_fields = ("name", "code", "professor", "owner__username", "owner__email")

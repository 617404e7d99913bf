from django.urls import path

from .views import (
    course_list,
    course_create,
    course_detail,
    course_edit,
    course_delete,
)
from .views_ics import course_calendar

app_name = "courses"

urlpatterns = [
    path("", course_list, name="list"),
    path("new/", course_create, name="create"),
    path("<int:pk>/", course_detail, name="detail"),
    path("<int:pk>/edit/", course_edit, name="edit"),
    path("<int:pk>/delete/", course_delete, name="delete"),
    path("<int:pk>/calendar.ics", course_calendar, name="calendar"),
]

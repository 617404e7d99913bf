from django.urls import path

from .views import (
    assignment_list,
    assignment_create,
    assignment_detail,
    assignment_edit,
    assignment_delete,
    assignment_status,
)

app_name = "assignments"

urlpatterns = [
    path("", assignment_list, name="list"),
    path("new/", assignment_create, name="create"),
    path("<int:pk>/", assignment_detail, name="detail"),
    path("<int:pk>/edit/", assignment_edit, name="edit"),
    path("<int:pk>/delete/", assignment_delete, name="delete"),
    path("<int:pk>/status/", assignment_status, name="status"),
]

"""Custom permissions for REST API v1."""
from __future__ import annotations

from rest_framework.permissions import BasePermission


class IsOwner(BasePermission):
    """Signed-in users may only touch objects they own.

    Viewset querysets are filtered by owner as well, so foreign objects
    read as 404.
    """

    def has_permission(self, request, view):
        return bool(request.user and request.user.is_authenticated)

    def has_object_permission(self, request, view, obj):
        return getattr(obj, "owner_id", None) == request.user.id

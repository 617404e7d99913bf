"""Course model and its read-side rollups.

A `Course` groups a user's assignments. Rollups (counts by status,
completion percentage, overdue counts) are computed from the related
assignments on demand; nothing is denormalised onto the course row.
Deleting a course cascades to its assignments.
"""
from __future__ import annotations

from collections import Counter
from datetime import datetime

from django.conf import settings
from django.core.validators import (
    MaxLengthValidator,
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
    RegexValidator,
)
from django.db import models

DEFAULT_COLOR = "#007bff"

code_validator = RegexValidator(
    regex=r"^[A-Za-z0-9-]+$",
    message="Code may only contain letters, digits and hyphens.",
)
color_validator = RegexValidator(
    regex=r"^#[0-9A-Fa-f]{6}$",
    message="Colour must be a hexadecimal value (#RRGGBB).",
)


def progress_bar_class(percentage: float) -> str:
    """Bootstrap background class for a progress bar at `percentage`."""
    if percentage == 0:
        return "bg-secondary"
    if percentage < 30:
        return "bg-danger"
    if percentage < 70:
        return "bg-warning"
    if percentage < 100:
        return "bg-info"
    return "bg-success"


class Course(models.Model):
    """A course (subject) owned by one user."""

    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="courses")
    name = models.CharField(max_length=255, validators=[MinLengthValidator(2)])
    code = models.CharField(max_length=50, validators=[MinLengthValidator(2), code_validator])
    color = models.CharField(max_length=7, default=DEFAULT_COLOR, validators=[color_validator])
    professor = models.CharField(max_length=255, blank=True)
    description = models.TextField(blank=True, validators=[MaxLengthValidator(1000)])
    credits = models.PositiveSmallIntegerField(
        null=True, blank=True, validators=[MinValueValidator(1), MaxValueValidator(30)]
    )
    semester = models.CharField(max_length=50, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ["name", "id"]
        constraints = [
            models.UniqueConstraint(fields=["owner", "code"], name="unique_course_code_per_owner"),
        ]

    def __str__(self) -> str:
        return f"{self.name} ({self.code})"

    def save(self, *args, **kwargs):
        self.code = normalise_code(self.code)
        self.name = (self.name or "").strip()
        self.professor = (self.professor or "").strip()
        super().save(*args, **kwargs)

    def is_owner(self, user) -> bool:
        return bool(user and user.is_authenticated and self.owner_id == user.id)

    # Rollups -------------------------------------------------------------

    def status_counts(self) -> dict[str, int]:
        """Number of assignments per status; every status has a key."""
        from assignments.models import AssignmentStatus

        counts = Counter(a.status for a in self.assignments.all())
        return {status.value: counts.get(status.value, 0) for status in AssignmentStatus}

    @property
    def assignments_count(self) -> int:
        return len(self.assignments.all())

    @property
    def todo_count(self) -> int:
        return self.status_counts()["todo"]

    @property
    def in_progress_count(self) -> int:
        return self.status_counts()["in_progress"]

    @property
    def completed_count(self) -> int:
        return self.status_counts()["completed"]

    @property
    def cancelled_count(self) -> int:
        return self.status_counts()["cancelled"]

    @property
    def completion_percentage(self) -> float:
        """Share of completed assignments, rounded to two places (0 when empty)."""
        total = self.assignments_count
        if not total:
            return 0.0
        return round(self.completed_count / total * 100, 2)

    def overdue_assignments_count(self, now: datetime | None = None) -> int:
        return sum(1 for a in self.assignments.all() if a.is_overdue(now))

    def has_overdue_assignments(self, now: datetime | None = None) -> bool:
        return any(a.is_overdue(now) for a in self.assignments.all())

    # Presentation helpers ------------------------------------------------

    @property
    def progress_bar_class(self) -> str:
        return progress_bar_class(self.completion_percentage)

    def color_with_opacity(self, opacity: float = 0.1) -> str:
        hex_value = (self.color or DEFAULT_COLOR).lstrip("#")
        r, g, b = (int(hex_value[i:i + 2], 16) for i in (0, 2, 4))
        return f"rgba({r}, {g}, {b}, {opacity})"

    def summary(self) -> str:
        return (
            f"{self.name} ({self.code}) - {self.assignments_count} assignments - "
            f"{self.completion_percentage}% complete"
        )


def normalise_code(code: str | None) -> str:
    return (code or "").strip().upper()

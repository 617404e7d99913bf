"""Assignment model: status, priority, progress and time tracking.

Status, completion percentage and `completed_at` are coupled:

- an assignment is completed exactly when `completed_at` is set and the
  percentage is 100;
- reaching 100% completes it, entering `completed` forces 100%;
- leaving `completed` clears `completed_at`.

`Assignment.update_progress` is the only place these three fields change.
Forms, serializers and views all go through it, so no save-time
correction pass is needed.

Time-dependent helpers accept an explicit `now` and fall back to the
current time when it is omitted.
"""
from __future__ import annotations

from datetime import datetime, timedelta
from decimal import Decimal

from django.conf import settings
from django.core.exceptions import ValidationError
from django.core.validators import (
    MaxLengthValidator,
    MaxValueValidator,
    MinLengthValidator,
    MinValueValidator,
)
from django.db import models
from django.utils import timezone

from courses.models import Course, progress_bar_class


class AssignmentStatus(models.TextChoices):
    TODO = "todo", "To do"
    IN_PROGRESS = "in_progress", "In progress"
    COMPLETED = "completed", "Completed"
    CANCELLED = "cancelled", "Cancelled"

    @property
    def badge_class(self) -> str:
        return STATUS_BADGES[self.value]

    @property
    def icon(self) -> str:
        return STATUS_ICONS[self.value]

    @property
    def is_terminal(self) -> bool:
        return self.value in (AssignmentStatus.COMPLETED, AssignmentStatus.CANCELLED)


class AssignmentPriority(models.TextChoices):
    LOW = "low", "Low"
    MEDIUM = "medium", "Medium"
    HIGH = "high", "High"
    URGENT = "urgent", "Urgent"

    @property
    def color(self) -> str:
        return PRIORITY_COLORS[self.value]

    @property
    def badge_class(self) -> str:
        return PRIORITY_BADGES[self.value]


STATUS_BADGES = {
    "todo": "bg-secondary",
    "in_progress": "bg-primary",
    "completed": "bg-success",
    "cancelled": "bg-danger",
}
STATUS_ICONS = {
    "todo": "📋",
    "in_progress": "⏳",
    "completed": "✅",
    "cancelled": "❌",
}
PRIORITY_COLORS = {
    "low": "#28a745",
    "medium": "#ffc107",
    "high": "#fd7e14",
    "urgent": "#dc3545",
}
PRIORITY_BADGES = {
    "low": "bg-success",
    "medium": "bg-warning",
    "high": "bg-orange",
    "urgent": "bg-danger",
}


def clamp_percentage(value) -> int:
    """Clamp a whole-number completion percentage into [0, 100].

    Booleans and fractional or infinite floats are rejected rather than
    truncated.
    """
    if isinstance(value, bool):
        raise TypeError("completion percentage must be a number, not a boolean")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"completion percentage must be a whole number, got {value!r}")
    return max(0, min(100, int(value)))


def parse_status(value) -> AssignmentStatus:
    """Return the status for `value` or raise `ValidationError`."""
    try:
        return AssignmentStatus(value)
    except ValueError:
        raise ValidationError({"status": f"Unknown status: {value!r}."}, code="invalid_choice")


def validate_due_date(value: datetime, previous: datetime | None = None, now: datetime | None = None) -> datetime:
    """Return `value` as an aware datetime, rejecting dates before today.

    A due date equal to `previous` at minute precision is always accepted.
    """
    if timezone.is_naive(value):
        value = timezone.make_aware(value, timezone.get_current_timezone())
    if previous is not None and previous.replace(second=0, microsecond=0) == value.replace(second=0, microsecond=0):
        return value
    today = timezone.localtime(now or timezone.now()).replace(hour=0, minute=0, second=0, microsecond=0)
    if value <= today:
        raise ValidationError("Due date must be in the future.", code="past_due_date")
    return value


class Assignment(models.Model):
    course = models.ForeignKey(Course, on_delete=models.CASCADE, related_name="assignments")
    # Denormalised copy of course.owner for direct per-user queries; kept equal on save.
    owner = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="assignments")
    title = models.CharField(max_length=255, validators=[MinLengthValidator(3)])
    description = models.TextField(blank=True, validators=[MaxLengthValidator(5000)])
    due_date = models.DateTimeField()
    priority = models.CharField(max_length=16, choices=AssignmentPriority.choices, default=AssignmentPriority.MEDIUM)
    status = models.CharField(max_length=16, choices=AssignmentStatus.choices, default=AssignmentStatus.TODO)
    notes = models.TextField(blank=True)
    completion_percentage = models.PositiveSmallIntegerField(
        default=0, validators=[MinValueValidator(0), MaxValueValidator(100)]
    )
    estimated_hours = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(Decimal("0.01"))]
    )
    actual_hours = models.DecimalField(
        max_digits=5, decimal_places=2, null=True, blank=True, validators=[MinValueValidator(Decimal("0.01"))]
    )
    created_at = models.DateTimeField(auto_now_add=True)
    # Null until the first update; recent-activity ordering relies on that.
    updated_at = models.DateTimeField(null=True, blank=True)
    completed_at = models.DateTimeField(null=True, blank=True)

    class Meta:
        ordering = ["due_date", "id"]
        indexes = [
            models.Index(fields=["owner", "status"], name="assignment_owner_status_idx"),
            models.Index(fields=["owner", "due_date"], name="assignment_owner_due_idx"),
        ]

    def __str__(self) -> str:
        return self.title or "New assignment"

    def save(self, *args, **kwargs):
        self.title = (self.title or "").strip()
        self.description = (self.description or "").strip()
        self._sync_owner()
        if self.pk is not None and not self._state.adding:
            self.updated_at = timezone.now()
            update_fields = kwargs.get("update_fields")
            if update_fields is not None:
                kwargs["update_fields"] = set(update_fields) | {"updated_at"}
        super().save(*args, **kwargs)

    def _sync_owner(self) -> None:
        if self.course_id is None:
            return
        course_owner_id = self.course.owner_id
        if self.owner_id is None:
            self.owner_id = course_owner_id
        elif self.owner_id != course_owner_id:
            raise ValidationError({"course": "Course belongs to another user."}, code="owner_mismatch")

    # State changes -------------------------------------------------------

    def update_progress(self, *, status=None, completion_percentage=None, now: datetime | None = None) -> None:
        """Apply a status and/or percentage change, keeping completion consistent.

        Status is applied before the percentage. Values are validated up
        front so a rejected call leaves the instance untouched.
        """
        new_status = parse_status(status) if status is not None else None
        if completion_percentage is not None:
            try:
                new_percentage = clamp_percentage(completion_percentage)
            except (TypeError, ValueError, OverflowError):
                raise ValidationError(
                    {"completion_percentage": "Completion percentage must be a whole number."}, code="invalid"
                )
        else:
            new_percentage = None
        now = now or timezone.now()

        if new_status is not None:
            was_completed = self.status == AssignmentStatus.COMPLETED
            if new_status == AssignmentStatus.COMPLETED:
                self.completion_percentage = 100
                if not was_completed or self.completed_at is None:
                    self.completed_at = now
            elif was_completed:
                self.completed_at = None
            self.status = new_status.value

        if new_percentage is not None:
            if self.status == AssignmentStatus.COMPLETED:
                # Completed work stays at 100%; lowering it does not reopen.
                self.completion_percentage = 100
            else:
                self.completion_percentage = new_percentage
                if new_percentage == 100:
                    self.status = AssignmentStatus.COMPLETED.value
                    self.completed_at = now

    def set_status(self, status, now: datetime | None = None) -> None:
        self.update_progress(status=status, now=now)

    def set_completion_percentage(self, value, now: datetime | None = None) -> None:
        self.update_progress(completion_percentage=value, now=now)

    # Derived queries -----------------------------------------------------

    @property
    def status_enum(self) -> AssignmentStatus:
        return AssignmentStatus(self.status)

    @property
    def priority_enum(self) -> AssignmentPriority:
        return AssignmentPriority(self.priority)

    def is_overdue(self, now: datetime | None = None) -> bool:
        if self.status_enum.is_terminal:
            return False
        return self.due_date < (now or timezone.now())

    def days_remaining(self, now: datetime | None = None) -> int:
        """Whole days until the due date, truncated; negative when overdue."""
        delta = self.due_date - (now or timezone.now())
        sign = -1 if delta < timedelta(0) else 1
        return sign * abs(delta).days

    def hours_remaining(self, now: datetime | None = None) -> int:
        delta = self.due_date - (now or timezone.now())
        return int(delta.total_seconds() / 3600)

    @property
    def estimated_time_remaining(self) -> float | None:
        if self.estimated_hours is None:
            return None
        return float(self.estimated_hours) * (100 - self.completion_percentage) / 100

    @property
    def time_difference(self) -> float | None:
        if self.estimated_hours is None or self.actual_hours is None:
            return None
        return float(self.actual_hours) - float(self.estimated_hours)

    @property
    def is_on_schedule(self) -> bool | None:
        if self.estimated_hours is None or self.actual_hours is None:
            return None
        return self.actual_hours <= self.estimated_hours

    # Presentation helpers ------------------------------------------------

    def urgency_class(self, now: datetime | None = None) -> str:
        if self.is_overdue(now):
            return "text-danger fw-bold"
        days = self.days_remaining(now)
        if days <= 1:
            return "text-danger"
        if days <= 3:
            return "text-warning"
        if days <= 7:
            return "text-info"
        return "text-success"

    def urgency_icon(self, now: datetime | None = None) -> str:
        if self.is_overdue(now):
            return "bi-exclamation-triangle-fill"
        days = self.days_remaining(now)
        if days <= 1:
            return "bi-alarm-fill"
        if days <= 3:
            return "bi-clock-history"
        return "bi-calendar-check"

    @property
    def progress_bar_class(self) -> str:
        return progress_bar_class(self.completion_percentage)

    def summary(self, now: datetime | None = None) -> str:
        days = self.days_remaining(now)
        if days > 0:
            when = f"in {days} day(s)"
        elif days == 0:
            when = "due today"
        else:
            when = f"{abs(days)} day(s) late"
        return f"{self.title} - {self.status_enum.label} - {when} ({self.completion_percentage}%)"

from __future__ import annotations

from django import forms
from django.core.exceptions import ValidationError
from django.utils import timezone

from courses.models import Course

from .models import Assignment, AssignmentStatus, validate_due_date


class AssignmentForm(forms.ModelForm):
    """Create/edit an assignment owned by `owner`.

    Status and completion percentage are not written straight onto the
    instance: `save` replays the submitted values through
    `Assignment.update_progress` so the completion rule holds.
    """

    class Meta:
        model = Assignment
        fields = (
            "title",
            "description",
            "course",
            "due_date",
            "priority",
            "status",
            "completion_percentage",
            "estimated_hours",
            "actual_hours",
            "notes",
        )
        widgets = {
            "description": forms.Textarea(attrs={"rows": 4}),
            "notes": forms.Textarea(attrs={"rows": 3}),
            "due_date": forms.DateTimeInput(attrs={"type": "datetime-local"}, format="%Y-%m-%dT%H:%M"),
            "completion_percentage": forms.NumberInput(attrs={"type": "range", "min": 0, "max": 100, "step": 5}),
            "estimated_hours": forms.NumberInput(attrs={"step": "0.5", "min": "0"}),
            "actual_hours": forms.NumberInput(attrs={"step": "0.5", "min": "0"}),
        }

    def __init__(self, *args, owner=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.owner = owner
        # Snapshot before binding; construct_instance overwrites these on validation.
        self._initial_status = self.instance.status
        self._initial_percentage = self.instance.completion_percentage
        self._initial_completed_at = self.instance.completed_at
        if owner is not None:
            self.fields["course"].queryset = Course.objects.filter(owner=owner).order_by("name")
        self.fields["course"].empty_label = "-- Select a course --"
        self.fields["status"].required = False
        self.fields["completion_percentage"].required = False
        # Render the stored due date in the widget's local format
        if self.instance.pk and self.instance.due_date:
            d = timezone.localtime(self.instance.due_date, timezone.get_current_timezone())
            self.initial["due_date"] = d.strftime("%Y-%m-%dT%H:%M")

    def clean_due_date(self):
        d = self.cleaned_data.get("due_date")
        if not d:
            return d
        previous = self.instance.due_date if self.instance.pk else None
        try:
            return validate_due_date(d, previous=previous)
        except ValidationError as exc:
            raise forms.ValidationError(exc.messages)

    def clean_status(self):
        return self.cleaned_data.get("status") or self._initial_status or AssignmentStatus.TODO

    def clean_completion_percentage(self):
        value = self.cleaned_data.get("completion_percentage")
        return self._initial_percentage if value is None else value

    def save(self, commit: bool = True) -> Assignment:
        assignment = super().save(commit=False)
        status = self.cleaned_data.get("status")
        percentage = self.cleaned_data.get("completion_percentage")
        assignment.status = self._initial_status
        assignment.completion_percentage = self._initial_percentage
        assignment.completed_at = self._initial_completed_at
        assignment.update_progress(
            status=status if status != self._initial_status else None,
            completion_percentage=percentage if percentage != self._initial_percentage else None,
        )
        if self.owner is not None and assignment.owner_id is None:
            assignment.owner = self.owner
        if commit:
            assignment.save()
        return assignment

"""Forms for creating and editing courses."""
from __future__ import annotations

from django import forms

from .models import Course, normalise_code


class CourseForm(forms.ModelForm):
    """Create/edit a course for the given owner.

    The owner is not a form field, so Django's own unique-constraint check
    skips the (owner, code) pair; `clean_code` performs it instead.
    """

    class Meta:
        model = Course
        fields = ("name", "code", "professor", "color", "description", "credits", "semester")
        widgets = {
            "color": forms.TextInput(attrs={"type": "color"}),
            "description": forms.Textarea(attrs={"rows": 3}),
            "code": forms.TextInput(attrs={"placeholder": "e.g. MATH101"}),
        }

    def __init__(self, *args, owner=None, **kwargs):
        super().__init__(*args, **kwargs)
        self.owner = owner or getattr(self.instance, "owner", None)

    def clean_code(self):
        code = normalise_code(self.cleaned_data.get("code"))
        if self.owner is not None:
            clash = Course.objects.filter(owner=self.owner, code=code).exclude(pk=self.instance.pk)
            if clash.exists():
                raise forms.ValidationError("You already have a course with this code.")
        return code

    def save(self, commit: bool = True) -> Course:
        course = super().save(commit=False)
        if self.owner is not None and course.owner_id is None:
            course.owner = self.owner
        if commit:
            course.save()
        return course

"""Serializers for REST API v1.

Everything is scoped to the requesting user: related courses are limited
to the user's own, and owners are taken from the request rather than the
payload.
"""
from __future__ import annotations

from django.core.exceptions import ValidationError as DjangoValidationError
from django.utils import timezone
from rest_framework import serializers

from assignments.models import Assignment, AssignmentPriority, AssignmentStatus
from assignments.models import validate_due_date as check_due_date
from courses.models import Course, normalise_code


def _request_user(serializer):
    request = serializer.context.get("request")
    return getattr(request, "user", None)


class CourseSerializer(serializers.ModelSerializer):
    assignments_count = serializers.IntegerField(read_only=True)
    completion_percentage = serializers.FloatField(read_only=True)
    status_counts = serializers.SerializerMethodField()

    class Meta:
        model = Course
        fields = (
            "id",
            "name",
            "code",
            "color",
            "professor",
            "description",
            "credits",
            "semester",
            "assignments_count",
            "completion_percentage",
            "status_counts",
            "created_at",
            "updated_at",
        )
        read_only_fields = ("created_at", "updated_at")

    def get_status_counts(self, obj) -> dict[str, int]:
        return obj.status_counts()

    def validate_code(self, value: str) -> str:
        code = normalise_code(value)
        user = _request_user(self)
        if user is not None:
            clash = Course.objects.filter(owner=user, code=code)
            if self.instance is not None:
                clash = clash.exclude(pk=self.instance.pk)
            if clash.exists():
                raise serializers.ValidationError("You already have a course with this code.")
        return code


class AssignmentSerializer(serializers.ModelSerializer):
    """Assignment with its derived metrics.

    Status and completion percentage are applied through
    `Assignment.update_progress` on both create and update.
    """

    course = serializers.PrimaryKeyRelatedField(queryset=Course.objects.none())
    course_name = serializers.CharField(source="course.name", read_only=True)
    course_code = serializers.CharField(source="course.code", read_only=True)
    status = serializers.ChoiceField(choices=AssignmentStatus.choices, required=False)
    priority = serializers.ChoiceField(choices=AssignmentPriority.choices, required=False)
    completion_percentage = serializers.IntegerField(min_value=0, max_value=100, required=False)
    status_label = serializers.SerializerMethodField()
    priority_label = serializers.SerializerMethodField()
    is_overdue = serializers.SerializerMethodField()
    days_remaining = serializers.SerializerMethodField()
    estimated_time_remaining = serializers.FloatField(read_only=True)
    time_difference = serializers.FloatField(read_only=True)
    is_on_schedule = serializers.BooleanField(read_only=True, allow_null=True)

    class Meta:
        model = Assignment
        fields = (
            "id",
            "course",
            "course_name",
            "course_code",
            "title",
            "description",
            "due_date",
            "priority",
            "priority_label",
            "status",
            "status_label",
            "completion_percentage",
            "notes",
            "estimated_hours",
            "actual_hours",
            "is_overdue",
            "days_remaining",
            "estimated_time_remaining",
            "time_difference",
            "is_on_schedule",
            "created_at",
            "updated_at",
            "completed_at",
        )
        read_only_fields = ("created_at", "updated_at", "completed_at")

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        user = _request_user(self)
        if user is not None and user.is_authenticated:
            self.fields["course"].queryset = Course.objects.filter(owner=user)

    def get_status_label(self, obj) -> str:
        return obj.status_enum.label

    def get_priority_label(self, obj) -> str:
        return obj.priority_enum.label

    def get_is_overdue(self, obj) -> bool:
        return obj.is_overdue(self._now())

    def get_days_remaining(self, obj) -> int:
        return obj.days_remaining(self._now())

    def _now(self):
        return self.context.get("now") or timezone.now()

    def validate_due_date(self, value):
        previous = self.instance.due_date if self.instance is not None else None
        try:
            return check_due_date(value, previous=previous)
        except DjangoValidationError as exc:
            raise serializers.ValidationError(exc.messages)

    def create(self, validated_data):
        status = validated_data.pop("status", None)
        percentage = validated_data.pop("completion_percentage", None)
        assignment = Assignment(**validated_data)
        assignment.update_progress(status=status, completion_percentage=percentage)
        assignment.save()
        return assignment

    def update(self, instance, validated_data):
        status = validated_data.pop("status", None)
        percentage = validated_data.pop("completion_percentage", None)
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        instance.update_progress(status=status, completion_percentage=percentage)
        instance.save()
        return instance


class AssignmentProgressSerializer(serializers.Serializer):
    """Payload for the quick status/progress action."""

    status = serializers.ChoiceField(choices=AssignmentStatus.choices, required=False)
    completion_percentage = serializers.IntegerField(min_value=0, max_value=100, required=False)

    def validate(self, attrs):
        if "status" not in attrs and "completion_percentage" not in attrs:
            raise serializers.ValidationError("Provide a status or a completion percentage.")
        return attrs


class CourseCountSerializer(serializers.Serializer):
    course_id = serializers.IntegerField()
    course_name = serializers.CharField()
    course_code = serializers.CharField()
    color = serializers.CharField()
    count = serializers.IntegerField()


class UpcomingAssignmentSerializer(serializers.ModelSerializer):
    course_name = serializers.CharField(source="course.name", read_only=True)
    course_color = serializers.CharField(source="course.color", read_only=True)

    class Meta:
        model = Assignment
        fields = ("id", "title", "course", "course_name", "course_color", "due_date", "priority", "status", "completion_percentage", "updated_at")
        read_only_fields = fields


class DashboardStatsSerializer(serializers.Serializer):
    todo = serializers.IntegerField()
    in_progress = serializers.IntegerField()
    completed = serializers.IntegerField()
    cancelled = serializers.IntegerField()
    total = serializers.IntegerField()
    progress_percentage = serializers.FloatField()
    overdue_count = serializers.IntegerField()
    total_courses = serializers.IntegerField()
    upcoming_assignments = UpcomingAssignmentSerializer(many=True)
    recent_activities = UpcomingAssignmentSerializer(many=True)
    assignments_by_course = CourseCountSerializer(many=True)


class ChartDataSerializer(serializers.Serializer):
    labels = serializers.ListField(child=serializers.CharField())
    data = serializers.ListField(child=serializers.IntegerField())
    colors = serializers.ListField(child=serializers.CharField())

from django.db import migrations, models
import django.core.validators
import django.db.models.deletion
from django.conf import settings


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="Course",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=255, validators=[django.core.validators.MinLengthValidator(2)])),
                (
                    "code",
                    models.CharField(
                        max_length=50,
                        validators=[
                            django.core.validators.MinLengthValidator(2),
                            django.core.validators.RegexValidator(
                                message="Code may only contain letters, digits and hyphens.",
                                regex="^[A-Za-z0-9-]+$",
                            ),
                        ],
                    ),
                ),
                (
                    "color",
                    models.CharField(
                        default="#007bff",
                        max_length=7,
                        validators=[
                            django.core.validators.RegexValidator(
                                message="Colour must be a hexadecimal value (#RRGGBB).",
                                regex="^#[0-9A-Fa-f]{6}$",
                            )
                        ],
                    ),
                ),
                ("professor", models.CharField(blank=True, max_length=255)),
                ("description", models.TextField(blank=True, validators=[django.core.validators.MaxLengthValidator(1000)])),
                (
                    "credits",
                    models.PositiveSmallIntegerField(
                        blank=True,
                        null=True,
                        validators=[
                            django.core.validators.MinValueValidator(1),
                            django.core.validators.MaxValueValidator(30),
                        ],
                    ),
                ),
                ("semester", models.CharField(blank=True, max_length=50)),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                ("owner", models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name="courses", to=settings.AUTH_USER_MODEL)),
            ],
            options={
                "ordering": ["name", "id"],
            },
        ),
        migrations.AddConstraint(
            model_name="course",
            constraint=models.UniqueConstraint(fields=("owner", "code"), name="unique_course_code_per_owner"),
        ),
    ]

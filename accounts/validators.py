from __future__ import annotations

import re
from django.core.exceptions import ValidationError
from django.utils.translation import gettext as _


class PasswordComplexityValidator:
    """Require letters of both cases and at least one digit.

    Length is handled by MinimumLengthValidator. All missing classes are
    reported together so the user can fix the password in one go.
    """

    rules = (
        (re.compile(r"[A-Z]"), "password_no_upper", "Password must contain an uppercase letter."),
        (re.compile(r"[a-z]"), "password_no_lower", "Password must contain a lowercase letter."),
        (re.compile(r"\d"), "password_no_digit", "Password must contain a digit."),
    )

    def validate(self, password: str, user=None) -> None:
        errors = [
            ValidationError(_(message), code=code)
            for pattern, code, message in self.rules
            if not pattern.search(password or "")
        ]
        if errors:
            raise ValidationError(errors)

    def get_help_text(self) -> str:
        return _("Your password must include an uppercase letter, a lowercase letter and a digit.")

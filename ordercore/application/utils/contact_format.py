from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")
_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def digits_only(value: str | None) -> str:
    return _NON_DIGITS.sub("", value or "")


def is_valid_email(value: str | None) -> bool:
    return bool(value) and bool(_EMAIL.match(value.strip()))


def clean_text(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None

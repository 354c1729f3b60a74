"""
Step validators.

Each factory returns a Validator: a callable taking the trimmed user input and
returning an error message, or None when the value is acceptable.
"""

import re
from datetime import date
from typing import Optional

from .models import Validator

_TIME_RE = re.compile(r"^([01]?\d|2[0-3])[:h]([0-5]\d)$")


def min_length(minimum: int) -> Validator:
    def _validate(value: str) -> Optional[str]:
        if len(value.strip()) < minimum:
            return f"Minimum {minimum} caracteres"
        return None

    return _validate


def iso_date(value: str) -> Optional[str]:
    if not value:
        return "Date requise"
    try:
        date.fromisoformat(value.strip())
    except ValueError:
        return "Format de date invalide"
    return None


def clock_time(value: str) -> Optional[str]:
    if not _TIME_RE.match(value.strip()):
        return "Format d'heure invalide"
    return None

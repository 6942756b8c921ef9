"""Chainable validators that wrap raw field values."""

from __future__ import annotations

import math
import re
from datetime import datetime, timezone
from typing import Any, Optional

_ID_PATTERN = re.compile(
    r"(?:[0-9a-fA-F]{24}"
    r"|[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[1-5][0-9a-fA-F]{3}-[89abAB][0-9a-fA-F]{3}-[0-9a-fA-F]{12})"
)
_EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
_WORD_PATTERN = re.compile(r"[^\W_]+(?:['\u2019][^\W_]+)*")
_DIRECTIVE_PATTERN = re.compile(r"%(.)", re.DOTALL)


class ValidationError(ValueError):
    """Raised when a value does not satisfy its validator's rules."""


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _round_half_away(number: float) -> float:
    if not math.isfinite(number):
        return number
    truncated = float(math.trunc(number))
    if abs(number - truncated) >= 0.5:
        truncated += math.copysign(1.0, number)
    return truncated


def _title_case(text: str) -> str:
    return _WORD_PATTERN.sub(
        lambda match: match.group(0)[:1].upper() + match.group(0)[1:],
        text.lower(),
    )


def _byte_length(text: str) -> int:
    return len(text.encode("utf-8"))


class StringValidateObject:
    """Validator for text fields, with optional in-place transforms."""

    def __init__(self, value: Any, input_name: str) -> None:
        self._raw = value
        self._input = input_name
        self._optional = False
        self._email = False
        self._id = False
        self._max_length = 0
        self._min_length = 0

    def is_optional(self) -> StringValidateObject:
        self._optional = True
        return self

    def is_email(self) -> StringValidateObject:
        self._email = True
        return self

    def is_id(self) -> StringValidateObject:
        self._id = True
        return self

    def max_length(self, max_length: int) -> StringValidateObject:
        self._max_length = max_length
        return self

    def min_length(self, min_length: int) -> StringValidateObject:
        self._min_length = min_length
        return self

    def transform_upper_case(self) -> StringValidateObject:
        if isinstance(self._raw, str):
            self._raw = self._raw.upper()
        return self

    def transform_lower_case(self) -> StringValidateObject:
        if isinstance(self._raw, str):
            self._raw = self._raw.lower()
        return self

    def transform_snake_case(self) -> StringValidateObject:
        if isinstance(self._raw, str):
            self._raw = self._raw.lower().replace(" ", "_")
        return self

    def transform_camel_case(self) -> StringValidateObject:
        if isinstance(self._raw, str):
            self._raw = _title_case(self._raw)
        return self

    @property
    def value(self) -> str:
        if not isinstance(self._raw, str):
            raise TypeError(f"field {self._input} does not hold a string")
        return self._raw

    def validate(self) -> None:
        if not isinstance(self._raw, str):
            raise ValidationError(f"field {self._input} is not a valid string")

        text = self._raw.strip()
        if not text:
            if self._optional:
                return
            raise ValidationError(f"field {self._input} is required")

        if self._id and not _ID_PATTERN.fullmatch(text):
            raise ValidationError(f"field {self._input} is not a valid ID")

        if self._email and not _EMAIL_PATTERN.fullmatch(text):
            raise ValidationError(f"field {self._input} is not a valid email")

        size = _byte_length(text)
        if self._max_length and size > self._max_length:
            raise ValidationError(
                f"field {self._input} exceeds the maximum length of "
                f"{self._max_length} characters"
            )
        if self._min_length and size < self._min_length:
            raise ValidationError(
                f"field {self._input} must have a minimum length of "
                f"{self._min_length} characters"
            )


class NumberValidateObject:
    """Validator for integer fields; numeric strings are read as integers."""

    def __init__(self, value: Any, input_name: str) -> None:
        self._raw = value
        self._input = input_name
        self._optional = False
        self._positive = False
        self._different_zero = False

    def is_optional(self) -> NumberValidateObject:
        self._optional = True
        return self

    def is_positive(self) -> NumberValidateObject:
        self._positive = True
        return self

    def is_different_zero(self) -> NumberValidateObject:
        self._different_zero = True
        return self

    @property
    def value(self) -> int:
        if isinstance(self._raw, str):
            if _INTEGER_PATTERN.fullmatch(self._raw):
                return int(self._raw)
            return 0
        if not _is_integer(self._raw):
            raise TypeError(f"{self._input} does not hold an integer")
        return self._raw

    def validate(self) -> None:
        if self._optional and self._raw is None:
            return

        if self._raw == "NaN":
            self._raw = 0

        if not _is_integer(self._raw):
            raise ValidationError(f"{self._input} must be an integer")

        number = self._raw
        if self._optional and number == 0:
            return
        if number == 0:
            raise ValidationError(f"{self._input} must be greater than zero")
        if self._positive and number < 0:
            raise ValidationError(f"{self._input} must be positive")
        if self._different_zero and number == 0:
            raise ValidationError(f"{self._input} must be different from zero")


class FloatValidateObject:
    """Validator for real-number fields, rounded to a number of decimals."""

    def __init__(self, value: Any, input_name: str) -> None:
        self._raw = value
        self._input = input_name
        self._optional = False
        self._positive = False
        self._different_zero = False
        self._decimals = 2

    def is_optional(self) -> FloatValidateObject:
        self._optional = True
        return self

    def is_positive(self) -> FloatValidateObject:
        self._positive = True
        return self

    def is_different_zero(self) -> FloatValidateObject:
        self._different_zero = True
        return self

    def decimals(self, decimals: int) -> FloatValidateObject:
        self._decimals = decimals
        return self

    @property
    def value(self) -> float:
        if not _is_real(self._raw):
            return 0.0
        number = float(self._raw)
        if math.isnan(number):
            return 0.0
        factor = 10.0 ** self._decimals
        return _round_half_away(number * factor) / factor

    def validate(self) -> None:
        if not _is_real(self._raw):
            raise ValidationError(f"{self._input} must be a float")

        number = float(self._raw)
        if self._optional and number == 0:
            return
        if self._positive and number < 0:
            raise ValidationError(f"{self._input} must be positive")
        if self._different_zero and number == 0:
            raise ValidationError(f"{self._input} must be different from zero")


def _zone_suffix(moment: datetime) -> str:
    offset = moment.utcoffset()
    if offset is None:
        return ""
    seconds = int(offset.total_seconds())
    if seconds == 0:
        return "Z"
    sign = "+" if seconds > 0 else "-"
    hours, remainder = divmod(abs(seconds), 3600)
    return f"{sign}{hours:02d}:{remainder // 60:02d}"


def _render(moment: datetime, pattern: str) -> str:
    def expand(match: re.Match) -> str:
        code = match.group(1)
        if code == "L":
            return f"{moment.microsecond // 1000:03d}"
        if code == "Q":
            return _zone_suffix(moment)
        return match.group(0)

    return moment.strftime(_DIRECTIVE_PATTERN.sub(expand, pattern))


def _default_string(moment: datetime) -> str:
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d} "
        f"{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    if moment.tzinfo is not None:
        text += f" {moment.strftime('%z')} {moment.tzname() or ''}".rstrip()
    return text


class TimeValidateObject:
    """Holder for a timestamp with an optional output format.

    The format is a strftime pattern that also understands ``%L``
    (milliseconds) and ``%Q`` (``Z`` for UTC, otherwise ``+hh:mm``).
    """

    def __init__(self, value: Optional[datetime], input_name: str) -> None:
        self._raw = value
        self._input = input_name
        self._optional = False
        self._format = ""

    def is_optional(self) -> TimeValidateObject:
        self._optional = True
        return self

    def format(self, fmt: str) -> TimeValidateObject:
        self._format = fmt
        return self

    @property
    def value(self) -> datetime:
        if self._raw is None:
            return datetime.min.replace(tzinfo=timezone.utc)
        return self._raw

    @property
    def value_string(self) -> str:
        if self._raw is None:
            return ""
        if self._format:
            return _render(self._raw, self._format)
        return _default_string(self._raw)
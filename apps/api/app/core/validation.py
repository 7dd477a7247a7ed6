from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple
from urllib.parse import urlparse


class _NotProvided:
    """Marker for "field absent from the request body" (as opposed to an explicit null)."""

    _instance: Optional["_NotProvided"] = None

    def __new__(cls) -> "_NotProvided":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NOT_PROVIDED"


# tri-state per field: NOT_PROVIDED (skip) | None (clear) | value (set)
NOT_PROVIDED = _NotProvided()

_INT_RE = re.compile(r"[+-]?\d+", re.ASCII)
_NUM_RE = re.compile(r"[+-]?(\d+(\.\d*)?|\.\d+)", re.ASCII)


@dataclass(frozen=True)
class Violation:
    code: str
    message: str


@dataclass(frozen=True)
class FieldRule:
    name: str
    kind: str = "text"  # text|int|number|bool|choice|url|ref|ref_list
    label: Optional[str] = None
    required: bool = False
    nullable: bool = True
    max_length: Optional[int] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    choices: Tuple[str, ...] = ()
    default: Any = NOT_PROVIDED

    @property
    def code(self) -> str:
        return f"INVALID_{self.name.upper()}"

    @property
    def display(self) -> str:
        return self.label or self.name.replace("_", " ").capitalize()


def _fmt(n: float) -> str:
    return str(int(n)) if float(n).is_integer() else str(n)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and _INT_RE.fullmatch(value.strip()):
        return int(value.strip())
    return None


def _as_number(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and _NUM_RE.fullmatch(value.strip()):
        return float(value.strip())
    return None


def _range_violation(v: float, label: str, code: str, lo: Optional[float], hi: Optional[float]) -> Optional[Violation]:
    if (lo is not None and v < lo) or (hi is not None and v > hi):
        if lo is not None and hi is not None:
            return Violation(code, f"{label} must be between {_fmt(lo)} and {_fmt(hi)}")
        if lo is not None:
            return Violation(code, f"{label} must be greater than or equal to {_fmt(lo)}")
        return Violation(code, f"{label} must be less than or equal to {_fmt(hi)}")  # type: ignore[arg-type]
    return None


def check_text(value: Any, *, label: str, code: str, max_length: Optional[int] = None, required: bool = False) -> Optional[Violation]:
    if not isinstance(value, str):
        return Violation(code, f"{label} must be a string")
    trimmed = value.strip()
    if not trimmed:
        return Violation(code, f"{label} cannot be empty") if required else None
    if max_length is not None and len(trimmed) > max_length:
        return Violation(code, f"{label} cannot exceed {max_length} characters")
    return None


def check_int_range(value: Any, *, label: str, code: str, min_value: Optional[float] = None, max_value: Optional[float] = None) -> Optional[Violation]:
    v = _as_int(value)
    if v is None:
        return Violation(code, f"{label} must be an integer")
    return _range_violation(v, label, code, min_value, max_value)


def check_number_range(value: Any, *, label: str, code: str, min_value: Optional[float] = None, max_value: Optional[float] = None) -> Optional[Violation]:
    v = _as_number(value)
    if v is None:
        return Violation(code, f"{label} must be a number")
    return _range_violation(v, label, code, min_value, max_value)


def check_choice(value: Any, *, label: str, code: str, choices: Iterable[str]) -> Optional[Violation]:
    allowed = tuple(choices)
    if not isinstance(value, str) or value not in allowed:
        return Violation(code, f"{label} must be one of: {', '.join(allowed)}")
    return None


def check_url(value: Any, *, label: str, code: str, max_length: Optional[int] = None) -> Optional[Violation]:
    if not isinstance(value, str):
        return Violation(code, f"{label} must be a string")
    trimmed = value.strip()
    if not trimmed:
        return None
    if max_length is not None and len(trimmed) > max_length:
        return Violation(code, f"{label} cannot exceed {max_length} characters")
    parsed = urlparse(trimmed)
    if parsed.scheme not in ("http", "https") or not parsed.netloc or " " in trimmed:
        return Violation(code, f"{label} must be a valid URL")
    return None


def check_bool(value: Any, *, label: str, code: str) -> Optional[Violation]:
    if isinstance(value, bool):
        return None
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return None
    return Violation(code, f"{label} must be a boolean")


def check_positive_id(value: Any, *, label: str, code: str) -> Optional[Violation]:
    v = _as_int(value)
    if v is None or v <= 0:
        return Violation(code, f"{label} must be a positive integer")
    return None


def validate_field(rule: FieldRule, value: Any) -> Tuple[Optional[Violation], Any]:
    """Check one field and return (violation, cleaned value)."""
    if value is NOT_PROVIDED:
        return None, NOT_PROVIDED

    label, code = rule.display, rule.code

    if value is None:
        if rule.required or not rule.nullable:
            return Violation(code, f"{label} cannot be null"), None
        return None, None

    if rule.kind == "text":
        v = check_text(value, label=label, code=code, max_length=rule.max_length, required=rule.required)
        return v, (None if v else (value.strip() or None))

    if rule.kind == "url":
        v = check_url(value, label=label, code=code, max_length=rule.max_length)
        return v, (None if v else (value.strip() or None))

    if rule.kind == "int":
        v = check_int_range(value, label=label, code=code, min_value=rule.min_value, max_value=rule.max_value)
        return v, (None if v else _as_int(value))

    if rule.kind == "number":
        v = check_number_range(value, label=label, code=code, min_value=rule.min_value, max_value=rule.max_value)
        return v, (None if v else _as_number(value))

    if rule.kind == "bool":
        v = check_bool(value, label=label, code=code)
        if v:
            return v, None
        return None, value if isinstance(value, bool) else value.strip().lower() == "true"

    if rule.kind == "choice":
        v = check_choice(value, label=label, code=code, choices=rule.choices)
        return v, (None if v else value)

    if rule.kind == "ref":
        v = check_positive_id(value, label=label, code=code)
        return v, (None if v else _as_int(value))

    if rule.kind == "ref_list":
        if not isinstance(value, (list, tuple)):
            return Violation(code, f"{label} must be a list of IDs"), None
        cleaned = []
        for item in value:
            if check_positive_id(item, label=label, code=code):
                return Violation(code, f"{label} must contain only positive integer IDs"), None
            cleaned.append(_as_int(item))
        return None, cleaned

    raise ValueError(f"unknown field kind: {rule.kind!r}")


def validate_payload(
    rules: Iterable[FieldRule],
    body: Mapping[str, Any],
    *,
    partial: bool,
) -> Tuple[Dict[str, Any], Optional[Violation]]:
    """Validate a request body against field rules.

    partial=False (create): required fields must be present, defaults fill the gaps.
    partial=True (update): only fields present in `body` are checked and returned.
    Stops at the first violation.
    """
    cleaned: Dict[str, Any] = {}
    for rule in rules:
        value = body.get(rule.name, NOT_PROVIDED)
        if value is NOT_PROVIDED and not partial:
            if rule.default is not NOT_PROVIDED:
                cleaned[rule.name] = rule.default
                continue
            if rule.required:
                return cleaned, Violation(rule.code, f"{rule.display} is required")
            continue

        violation, out = validate_field(rule, value)
        if violation is not None:
            return cleaned, violation
        if out is not NOT_PROVIDED:
            cleaned[rule.name] = out
    return cleaned, None

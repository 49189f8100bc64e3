"""
Required-field checks for request bodies.

Each rule maps an attribute to the message reported when it is missing or
blank. All failing rules are collected into one RequestValidationFailed so
the client sees every problem at once.
"""

from typing import Any

from devconnector.exceptions import RequestValidationFailed


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, (list, tuple, dict)):
        return len(value) == 0
    return False


def _param_name(obj: Any, attribute: str) -> str:
    """Report the field under the name the client used (its alias, if any)."""
    model_fields = getattr(type(obj), "model_fields", {})
    field = model_fields.get(attribute)
    if field is not None and field.alias:
        return field.alias
    return attribute


def check_not_empty(obj: Any, rules: dict[str, str]) -> None:
    """
    Raise RequestValidationFailed listing every rule whose field is empty.

    Args:
        obj: Request model (or any object exposing the attributes).
        rules: Mapping of attribute name to error message.
    """
    errors = [
        {"msg": message, "param": _param_name(obj, attribute), "location": "body"}
        for attribute, message in rules.items()
        if _is_empty(getattr(obj, attribute, None))
    ]
    if errors:
        raise RequestValidationFailed(errors)


def parse_id(raw: int | str) -> int | None:
    """Path identifier as an int, or None when it cannot name any record."""
    if isinstance(raw, int):
        return raw
    raw = raw.strip()
    if not raw.isascii() or not raw.isdigit():
        return None
    return int(raw)

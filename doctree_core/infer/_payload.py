"""Helpers for reading tag payloads.

Payload helpers raise TagPayloadError; every inferencer catches it and records
the message on the entity, leaving the affected field unset.
"""

from collections.abc import Callable

from doctree_core.comments import Entity, Tag
from doctree_core.exceptions import TagPayloadError

Stage = Callable[[Entity], Entity | None]

_BRACKETS = {")": "(", "]": "[", ">": "<", "}": "{"}


def payload_str(tag: Tag, key: str, *, required: bool = False) -> str | None:
    """Read a string payload value, stripped. Empty strings count as missing."""
    value = tag.payload.get(key)
    if value is None:
        if required:
            raise TagPayloadError(f"@{tag.kind} is missing '{key}'")
        return None
    if not isinstance(value, str):
        raise TagPayloadError(f"@{tag.kind} '{key}' must be a string, got {type(value).__name__}")
    value = value.strip()
    if not value and required:
        raise TagPayloadError(f"@{tag.kind} has an empty '{key}'")
    return value or None


def payload_flag(tag: Tag, key: str) -> bool:
    value = tag.payload.get(key, False)
    if not isinstance(value, bool):
        raise TagPayloadError(f"@{tag.kind} '{key}' must be a boolean, got {type(value).__name__}")
    return value


def check_type_expression(expression: str) -> str:
    """Validate a type expression: non-empty with balanced brackets."""
    expression = expression.strip()
    if not expression:
        raise TagPayloadError("empty type expression")
    stack: list[str] = []
    for char in expression:
        if char in "([<{":
            stack.append(char)
        elif char in _BRACKETS:
            # '=>' in arrow function types is not a closing bracket
            if char == ">" and (not stack or stack[-1] != "<"):
                continue
            if not stack or stack.pop() != _BRACKETS[char]:
                raise TagPayloadError(f"unbalanced type expression '{expression}'")
    if stack:
        raise TagPayloadError(f"unbalanced type expression '{expression}'")
    return expression


def payload_type(tag: Tag, key: str = "type") -> str | None:
    """Read and validate an optional type expression."""
    value = payload_str(tag, key)
    return check_type_expression(value) if value is not None else None

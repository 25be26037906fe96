"""
Input checks run by the forwarder before any network I/O.

Presence is checked for every rule first, so a missing field is always
reported ahead of a malformed one.  Each failure raises
``RequestValidationFailure`` naming the offending field.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional
from urllib.parse import quote

from society_gateway.core.utils import is_blank, parse_number
from society_gateway.forwarder.descriptors import FieldRule, Operation
from society_gateway.forwarder.errors import RequestValidationFailure


def resolve_path(op: Operation, path_params: Optional[Mapping[str, Any]]) -> str:
    """Return ``op.path`` with its placeholders filled and URL-quoted."""
    params = dict(path_params or {})
    values: Dict[str, str] = {}
    for name in op.path_params:
        value = params.get(name)
        if is_blank(value):
            label = op.id_label or op.label
            raise RequestValidationFailure(name, f"{label} ID is required")
        values[name] = quote(str(value).strip(), safe="")
    return op.path.format(**values) if values else op.path


def _coerce(rule: FieldRule, value: Any) -> Any:
    if rule.numeric:
        number = parse_number(value)
        if number is None:
            if rule.lenient:
                return rule.default
            raise RequestValidationFailure(rule.name, f"{rule.name} must be a number")
        if rule.positive and number <= 0:
            raise RequestValidationFailure(rule.name, f"{rule.name} must be greater than 0")
        if rule.non_negative and number < 0:
            raise RequestValidationFailure(rule.name, f"{rule.name} must not be negative")
        value = number
    elif isinstance(value, str):
        value = value.strip()

    if rule.choices and value not in rule.choices:
        raise RequestValidationFailure(
            rule.name, f"{rule.name} must be one of: {', '.join(rule.choices)}"
        )
    if rule.min_length and len(str(value)) < rule.min_length:
        raise RequestValidationFailure(
            rule.name, f"{rule.name} must be at least {rule.min_length} characters"
        )
    return value


def validate_body(op: Operation, body: Any) -> Optional[Dict[str, Any]]:
    """Check and coerce ``body`` against ``op.fields``.

    Returns the outbound JSON object (declared fields coerced, optional
    defaults filled, undeclared fields untouched), or ``None`` when the
    operation sends no body.
    """
    if not op.verb.carries_body:
        return None
    if body is None:
        body = {}
    if not isinstance(body, Mapping):
        raise RequestValidationFailure("body", "Request body must be a JSON object")

    for rule in op.fields:
        if rule.required and is_blank(body.get(rule.name)):
            raise RequestValidationFailure(rule.name, f"{rule.name} is required")

    outbound = dict(body)
    for rule in op.fields:
        value = body.get(rule.name)
        if is_blank(value):
            if rule.default is not None:
                outbound[rule.name] = rule.default
            continue
        outbound[rule.name] = _coerce(rule, value)
    return outbound

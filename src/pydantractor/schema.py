"""
Schema description and response validation.

Schema.py walks a pydantic schema (a BaseModel subclass or any annotation
pydantic can validate) and produces the plain-data structure used to brief
the model, then validates the model's JSON answer against the same schema.

Main Interface:
    from pydantractor.schema import describe_schema, validate_response

    structure = describe_schema(UserList)
    users = validate_response('{"users": []}', UserList)
"""

from __future__ import annotations

import json
import logging
import types
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Optional, Union, get_args, get_origin

from pydantic import BaseModel, RootModel, TypeAdapter, ValidationError

from .errors import MalformedJSONError, SchemaValidationError

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# Schema node kinds
# -----------------------------------------------------------------------------

_NONE_TYPE = type(None)
_UNION_ORIGINS = (Union, types.UnionType)
_ARRAY_TYPES = (list, tuple, set, frozenset)

# Identity-matched; bool is listed on its own so it never reads as a number.
_PRIMITIVE_TAGS = (
    (str, "string"),
    (bool, "boolean"),
    (int, "number"),
    (float, "number"),
    (Decimal, "number"),
    (_NONE_TYPE, "null"),
    (None, "null"),
)


class NodeKind(str, Enum):
    """Closed set of schema node shapes the describer understands."""

    PRIMITIVE = "primitive"
    ARRAY = "array"
    OBJECT = "object"
    OPTIONAL = "optional"
    UNKNOWN = "unknown"


def _strip_annotated(annotation: Any) -> Any:
    while get_origin(annotation) is Annotated:
        annotation = get_args(annotation)[0]
    return annotation


def _annotated_description(annotation: Any) -> Optional[str]:
    """Description carried by Annotated[..., Field(description=...)] metadata, if any."""
    while get_origin(annotation) is Annotated:
        for meta in reversed(annotation.__metadata__):
            description = getattr(meta, "description", None)
            if isinstance(description, str):
                return description
        annotation = get_args(annotation)[0]
    return None


def _is_model(annotation: Any) -> bool:
    return get_origin(annotation) is None and isinstance(annotation, type) and issubclass(annotation, BaseModel)


def classify(annotation: Any) -> tuple[NodeKind, Any]:
    """
    Resolve an annotation to its node kind and payload.

    Payload per kind: the primitive type (PRIMITIVE), the element annotation
    (ARRAY), the model class (OBJECT), the wrapped annotation (OPTIONAL), or
    the annotation itself (UNKNOWN).
    """
    annotation = _strip_annotated(annotation)
    origin = get_origin(annotation)

    if origin in _UNION_ORIGINS:
        args = get_args(annotation)
        non_null = [a for a in args if a is not _NONE_TYPE]
        if len(non_null) == 1 and len(args) == 2:
            return NodeKind.OPTIONAL, non_null[0]
        return NodeKind.UNKNOWN, annotation

    if origin in _ARRAY_TYPES or any(annotation is t for t in _ARRAY_TYPES):
        args = get_args(annotation)
        return NodeKind.ARRAY, (args[0] if args else Any)

    if _is_model(annotation):
        # A RootModel validates its bare root value, so it takes that shape.
        if issubclass(annotation, RootModel):
            return classify(annotation.model_fields["root"].annotation)
        return NodeKind.OBJECT, annotation

    for py_type, _tag in _PRIMITIVE_TAGS:
        if annotation is py_type:
            return NodeKind.PRIMITIVE, annotation

    return NodeKind.UNKNOWN, annotation


def _strip_optional(annotation: Any) -> Any:
    kind, payload = classify(annotation)
    while kind is NodeKind.OPTIONAL:
        annotation = payload
        kind, payload = classify(annotation)
    return annotation


def get_type_name(annotation: Any) -> str:
    """
    Return the type tag of a schema node.

    One of: string, number, boolean, array, object, null, unknown.
    Optional[X] resolves to the tag of X.
    """
    kind, payload = classify(annotation)
    if kind is NodeKind.OPTIONAL:
        return get_type_name(payload)
    if kind is NodeKind.PRIMITIVE:
        return next(tag for py_type, tag in _PRIMITIVE_TAGS if payload is py_type)
    if kind is NodeKind.ARRAY:
        return "array"
    if kind is NodeKind.OBJECT:
        return "object"
    logger.debug("Unsupported schema node %r described as 'unknown'", payload)
    return "unknown"


# -----------------------------------------------------------------------------
# Schema description
# -----------------------------------------------------------------------------

def describe_schema(schema: Any, _stack: tuple[type[BaseModel], ...] = ()) -> dict[str, Any]:
    """
    Create the plain-data description of a schema.

    - Model: {field_name: {type, description, properties?, items?}, ...}
    - Array: {"type": "array", "items": <description of the element>}
    - Leaf:  {"type": <tag>, "description": <description or "">}

    Args:
        schema: BaseModel subclass or a pydantic-validatable annotation

    Returns:
        Description mirroring the schema's nesting and field names
    """
    kind, payload = classify(schema)

    if kind is NodeKind.OBJECT:
        stack = _stack + (payload,)
        result: dict[str, Any] = {}
        for name, field_info in payload.model_fields.items():
            key = field_info.alias or name
            result[key] = _describe_field(field_info.annotation, field_info.description, stack)
        return result

    if kind is NodeKind.ARRAY:
        return {"type": "array", "items": describe_schema(_strip_optional(payload), _stack)}

    return {
        "type": get_type_name(schema),
        "description": _annotated_description(schema) or "",
    }


def _describe_field(annotation: Any, description: Optional[str], stack: tuple[type[BaseModel], ...]) -> dict[str, Any]:
    entry: dict[str, Any] = {
        "type": get_type_name(annotation),
        "description": description or _annotated_description(annotation) or "",
    }

    kind, payload = classify(_strip_optional(annotation))
    if kind is NodeKind.OBJECT:
        # Self-referencing models stop at the first repeat.
        if payload not in stack:
            entry["properties"] = describe_schema(payload, stack)
    elif kind is NodeKind.ARRAY:
        element_kind, element = classify(_strip_optional(payload))
        if not (element_kind is NodeKind.OBJECT and element in stack):
            entry["items"] = describe_schema(_strip_optional(payload), stack)
    return entry


def schema_structure(schema: Any) -> str:
    """Pretty-printed JSON form of describe_schema(), as embedded in the prompt."""
    return json.dumps(describe_schema(schema), indent=2)


# -----------------------------------------------------------------------------
# Response parsing & validation
# -----------------------------------------------------------------------------

def parse_json(content: str) -> Any:
    """Strictly parse the provider's text as JSON."""
    try:
        return json.loads(content)
    except json.JSONDecodeError as e:
        raise MalformedJSONError(e.msg, e.doc, e.pos) from e


def format_issues(error: ValidationError) -> list[dict[str, Any]]:
    """Flatten a pydantic ValidationError into [{path, message, type}, ...]."""
    return [
        {
            "path": ".".join(str(part) for part in err["loc"]),
            "message": err["msg"],
            "type": err["type"],
        }
        for err in error.errors()
    ]


def validate_data(data: Any, schema: Any) -> Any:
    """
    Validate already-parsed data against the schema.

    Returns the model instance for BaseModel schemas, otherwise whatever
    TypeAdapter(schema) produces (defaults and coercions applied).
    """
    try:
        if _is_model(schema):
            return schema.model_validate(data)
        return TypeAdapter(schema).validate_python(data)
    except ValidationError as e:
        issues = format_issues(e)
        logger.debug("Response failed validation with %d issue(s)", len(issues))
        raise SchemaValidationError(issues) from e


def validate_response(content: str, schema: Any) -> Any:
    """Parse the provider's JSON text and validate it against the schema."""
    return validate_data(parse_json(content), schema)

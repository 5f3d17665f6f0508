"""Validate raw project records into normalized ``ProjectEntry`` models.

Pydantic does the structural work; this module only translates its error
list into the three content errors (``MissingOrInvalidField``,
``InvalidEnumValue``, ``InvalidURL``) with readable field paths such as
``components[2].type``.

Nothing here touches the filesystem or logs: ``validate`` is a pure
function of its input.
"""

from __future__ import annotations

import types
from enum import Enum
from typing import Annotated, Any, Union, get_args, get_origin

from pydantic import AfterValidator, BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ContentValidationError, InvalidEnumValue, InvalidURL, MissingOrInvalidField
from .models import ProjectEntry, check_absolute_url


# ---------------------------------------------------------------------------
# Type introspection helpers
# ---------------------------------------------------------------------------

def _is_url_annotation(tp: Any) -> bool:
    if get_origin(tp) is not Annotated:
        return False
    return any(
        isinstance(meta, AfterValidator) and meta.func is check_absolute_url
        for meta in tp.__metadata__
    )


def _unwrap(tp: Any) -> Any:
    """Strip ``Annotated`` and ``Optional`` wrappers."""
    while True:
        origin = get_origin(tp)
        if origin is Annotated:
            tp = get_args(tp)[0]
            continue
        if origin is Union or origin is types.UnionType:
            args = [a for a in get_args(tp) if a is not type(None)]
            if len(args) == 1:
                tp = args[0]
                continue
        return tp


def _strip_optional(tp: Any) -> Any:
    origin = get_origin(tp)
    if origin is Union or origin is types.UnionType:
        args = [a for a in get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0]
    return tp


def _item_type(tp: Any) -> Any:
    tp = _unwrap(tp)
    if get_origin(tp) in (tuple, list):
        args = get_args(tp)
        return args[0] if args else None
    return None


def _field_annotation(schema: type[BaseModel], loc: tuple[Any, ...]) -> Any:
    """Resolve the declared annotation at *loc*, or ``None`` if unknown."""
    annotation: Any = schema
    for part in loc:
        if annotation is None:
            return None
        if isinstance(part, int):
            annotation = _item_type(annotation)
            continue
        model = _unwrap(annotation)
        if not (isinstance(model, type) and issubclass(model, BaseModel)):
            return None
        annotation = None
        for name, info in model.model_fields.items():
            if part in (name, info.alias):
                # pydantic moves top-level Annotated metadata onto the field
                annotation = info.annotation
                if info.metadata:
                    annotation = Annotated[(annotation, *info.metadata)]
                break
    return annotation


def _enum_of(tp: Any) -> type[Enum] | None:
    tp = _unwrap(tp)
    if isinstance(tp, type) and issubclass(tp, Enum):
        return tp
    return None


def describe_type(tp: Any) -> str:
    """Human-readable name of a schema type, e.g. ``array of string``."""
    tp = _strip_optional(tp)
    if _is_url_annotation(tp):
        return "absolute URL string"
    tp = _unwrap(tp)
    enum_cls = _enum_of(tp)
    if enum_cls is not None:
        return "one of " + ", ".join(repr(m.value) for m in enum_cls)
    if get_origin(tp) in (tuple, list):
        return f"array of {describe_type(_item_type(tp))}"
    if tp is str:
        return "string"
    if tp is bool:
        return "boolean"
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return "object"
    return "value"


# ---------------------------------------------------------------------------
# Error translation
# ---------------------------------------------------------------------------

def format_path(loc: tuple[Any, ...]) -> str:
    """Render a pydantic ``loc`` tuple as ``components[2].type``."""
    path = ""
    for part in loc:
        if isinstance(part, int):
            path += f"[{part}]"
        elif path:
            path += f".{part}"
        else:
            path = str(part)
    return path


def _translate(schema: type[BaseModel], error: dict[str, Any]) -> ContentValidationError:
    loc = tuple(error.get("loc", ()))
    path = format_path(loc)
    kind = error.get("type", "")
    value = error.get("input")
    ctx = error.get("ctx") or {}
    annotation = _field_annotation(schema, loc)

    if kind == "url_absolute":
        return InvalidURL(path, value, str(ctx.get("reason", "")))
    if kind == "missing":
        return MissingOrInvalidField(path, describe_type(annotation), missing=True)
    if kind == "enum":
        enum_cls = _enum_of(annotation)
        if enum_cls is not None:
            allowed = [m.value for m in enum_cls]
        else:
            allowed = [str(ctx.get("expected", ""))]
        return InvalidEnumValue(path, value, allowed)
    return MissingOrInvalidField(path, describe_type(annotation))


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def collect_issues(raw: Any, schema: type[BaseModel] = ProjectEntry) -> list[ContentValidationError]:
    """Return every violation in *raw*, in schema field order.

    An empty list means *raw* is valid.
    """
    try:
        schema.model_validate(raw)
    except PydanticValidationError as exc:
        return [_translate(schema, e) for e in exc.errors()]
    return []


def validate(raw: Any, schema: type[BaseModel] = ProjectEntry) -> Any:
    """Validate and normalize one raw record.

    Returns the frozen model with all defaults applied. On failure raises
    the first violation found; the full list is attached as ``.issues``.
    """
    try:
        return schema.model_validate(raw)
    except PydanticValidationError as exc:
        issues = [_translate(schema, e) for e in exc.errors()]
        first = issues[0]
        first.issues = issues
        raise first from exc


def is_valid(raw: Any, schema: type[BaseModel] = ProjectEntry) -> bool:
    """True when *raw* validates cleanly against *schema*."""
    return not collect_issues(raw, schema)

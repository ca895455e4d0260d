from __future__ import annotations

from typing import Any, Dict, Tuple

from django.core.exceptions import FieldDoesNotExist
from django.db import models

from django_datatables.exceptions import InvalidArgumentError

# Django internal field type -> storage type understood by Column.
STORAGE_TYPES = {
    "AutoField": "integer",
    "BigAutoField": "biginteger",
    "SmallAutoField": "smallinteger",
    "IntegerField": "integer",
    "PositiveIntegerField": "integer",
    "BigIntegerField": "biginteger",
    "PositiveBigIntegerField": "biginteger",
    "SmallIntegerField": "smallinteger",
    "PositiveSmallIntegerField": "smallinteger",
    "BooleanField": "boolean",
    "NullBooleanField": "boolean",
    "CharField": "string",
    "SlugField": "string",
    "EmailField": "string",
    "URLField": "string",
    "GenericIPAddressField": "string",
    "IPAddressField": "string",
    "FilePathField": "string",
    "FileField": "string",
    "ImageField": "string",
    "TextField": "text",
    "DateField": "date",
    "DateTimeField": "datetime",
    "TimeField": "time",
    "DecimalField": "decimal",
    "FloatField": "float",
    "JSONField": "json",
    "UUIDField": "uuid",
    "BinaryField": "binary",
}


def storage_type(field: models.Field) -> str:
    """Return the storage type name for ``field``.

    Relations report the type of the field they point to. Unknown internal
    types fall back to their lower-cased name without the ``Field`` suffix.
    """
    if getattr(field, "is_relation", False) and getattr(field, "target_field", None) is not None:
        target = field.target_field
        if target is not field:
            return storage_type(target)
    internal = field.get_internal_type()
    if internal in STORAGE_TYPES:
        return STORAGE_TYPES[internal]
    if internal.endswith("Field"):
        internal = internal[: -len("Field")]
    return internal.lower()


def resolve_field(model: type[models.Model], path: str) -> Tuple[type[models.Model], models.Field]:
    """Walk a dotted ``path`` over forward relations to its leaf field."""
    parts = [p for p in (path or "").split(".") if p]
    if not parts:
        raise InvalidArgumentError(f"Field path must not be empty. Found: {path!r}.")
    current = model
    for index, name in enumerate(parts):
        try:
            field = current._meta.get_field(name)
        except FieldDoesNotExist:
            raise InvalidArgumentError(
                f"{current._meta.label} has no field {name!r} (path {path!r})."
            ) from None
        if index == len(parts) - 1:
            if not isinstance(field, models.Field):
                raise InvalidArgumentError(
                    f"{current._meta.label}.{name} is not a concrete field (path {path!r})."
                )
            return current, field
        if not getattr(field, "is_relation", False) or getattr(field, "many_to_many", False) or field.auto_created:
            raise InvalidArgumentError(
                f"{current._meta.label}.{name} is not a forward relation (path {path!r})."
            )
        current = field.remote_field.model
    raise AssertionError("unreachable")  # pragma: no cover


def get_column_schema(model: type[models.Model], path: str) -> Dict[str, Any]:
    _, field = resolve_field(model, path)
    default = field.default if field.has_default() else None
    if callable(default):
        default = None
    return {
        "type": storage_type(field),
        "null": bool(getattr(field, "null", False)),
        "length": getattr(field, "max_length", None),
        "default": default,
        "comment": str(field.help_text or ""),
        "relation": bool(field.is_relation),
    }

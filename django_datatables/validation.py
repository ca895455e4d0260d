"""Stateless checks shared by the configuration builders.

Every helper raises :class:`InvalidArgumentError` with a message naming the
offending field together with the value that was found and what was expected.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping, Sequence, Tuple, Union

from .exceptions import InvalidArgumentError

TypeSpec = Union[type, Tuple[type, ...]]


def _type_names(types: TypeSpec) -> str:
    if not isinstance(types, tuple):
        types = (types,)
    names = [t.__name__ for t in types]
    if len(names) == 1:
        return names[0]
    return ", ".join(names[:-1]) + " or " + names[-1]


def is_of_type(value: Any, types: TypeSpec) -> bool:
    """``isinstance`` that refuses ``bool`` where only ``int`` is expected."""
    if not isinstance(types, tuple):
        types = (types,)
    if isinstance(value, bool) and bool not in types:
        return False
    return isinstance(value, types)


def check_type_or_fail(value: Any, types: TypeSpec, field: str, *, allow_none: bool = True) -> None:
    if value is None:
        if allow_none:
            return
        raise InvalidArgumentError(f"{field} must be {_type_names(types)}. Found: None.")
    if not is_of_type(value, types):
        raise InvalidArgumentError(
            f"{field} must be {_type_names(types)}. Found: {type(value).__name__}."
        )


def in_choices_or_fail(value: Any, choices: Iterable[Any], field: str, *, allow_none: bool = True) -> None:
    choices = list(choices)
    if value is None and allow_none:
        return
    if value not in choices:
        allowed = ", ".join(repr(c) for c in choices)
        raise InvalidArgumentError(f"{field} must be one of {allowed}. Found: {value!r}.")


def check_keys_value_types_or_fail(
    value: Any,
    key_type: TypeSpec,
    value_type: TypeSpec,
    field: str,
) -> None:
    """Check the key and value types of a mapping or sequence.

    Sequences (lists and tuples) are treated as mappings keyed by their integer
    positions, so they only pass when ``key_type`` accepts ``int``.
    """
    if isinstance(value, Mapping):
        items = list(value.items())
    elif isinstance(value, (list, tuple)):
        items = list(enumerate(value))
    else:
        raise InvalidArgumentError(
            f"{field} must be a mapping or a sequence. Found: {type(value).__name__}."
        )
    for key, item in items:
        if not is_of_type(key, key_type):
            raise InvalidArgumentError(
                f"In {field} keys must be {_type_names(key_type)}. "
                f"Found: {type(key).__name__} ({key!r})."
            )
        if not is_of_type(item, value_type):
            raise InvalidArgumentError(
                f"In {field} values must be {_type_names(value_type)}. "
                f"Found: {type(item).__name__} ({item!r})."
            )


def validate_body_or_params(value: Any, field: str = "body_or_params") -> None:
    """Accept a JavaScript body string or a mapping of template parameters.

    Only the structure is checked; the body is never evaluated.
    """
    if isinstance(value, str):
        return
    if isinstance(value, Mapping):
        for key in value:
            if not isinstance(key, str):
                raise InvalidArgumentError(
                    f"In {field} parameter names must be str. Found: {type(key).__name__} ({key!r})."
                )
        return
    raise InvalidArgumentError(
        f"{field} must be a str body or a mapping of parameters. Found: {type(value).__name__}."
    )


def non_negative_or_fail(values: Sequence[int], field: str) -> None:
    for number in values:
        if number < 0:
            raise InvalidArgumentError(f"In {field} must be greater or equal 0. Found: {number}.")

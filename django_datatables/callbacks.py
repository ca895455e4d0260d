"""Rendering of JavaScript callbacks embedded in a DataTables configuration.

Callbacks are stored on the builders either as a function body (``str``) or
as a mapping of parameters for the ``django_datatables/callbacks/<name>.js``
template. Projects override that template through the usual template loader
precedence.
"""
from __future__ import annotations

import json
from typing import Any, Dict, List, Mapping, Union

from django.core.serializers.json import DjangoJSONEncoder
from django.template.loader import render_to_string

from django_datatables.exceptions import InvalidArgumentError
from django_datatables.validation import validate_body_or_params

# Callback option -> arguments DataTables passes to it.
CALLBACK_ARGUMENTS = {
    "createdCell": ("td", "cellData", "rowData", "row", "col"),
}

_SCRIPT_ESCAPES = {
    ord(">"): "\\u003E",
    ord("<"): "\\u003C",
    ord("&"): "\\u0026",
}


def render_callback(name: str, body_or_params: Union[str, Mapping[str, Any]]) -> str:
    if name not in CALLBACK_ARGUMENTS:
        raise InvalidArgumentError(f"Unknown callback {name!r}.")
    validate_body_or_params(body_or_params, name)
    if isinstance(body_or_params, str):
        body = body_or_params
    else:
        body = render_to_string(f"django_datatables/callbacks/{name}.js", dict(body_or_params))
    arguments = ", ".join(CALLBACK_ARGUMENTS[name])
    return f"function ({arguments}) {{\n{body.strip()}\n}}"


def _placeholder(index: int) -> str:
    return f"__datatables_callback_{index}__"


def dumps_config(config: Mapping[str, Any]) -> str:
    """Encode ``config`` as a JavaScript object literal safe inside ``<script>``.

    Callback options are replaced by their rendered functions; everything
    else is plain JSON.
    """
    callbacks: List[str] = []

    def replace(value):
        if isinstance(value, Mapping):
            out: Dict[str, Any] = {}
            for key, item in value.items():
                if key in CALLBACK_ARGUMENTS and item is not None:
                    out[key] = _placeholder(len(callbacks))
                    callbacks.append(render_callback(key, item))
                else:
                    out[key] = replace(item)
            return out
        if isinstance(value, (list, tuple)):
            return [replace(item) for item in value]
        return value

    encoded = json.dumps(replace(config), cls=DjangoJSONEncoder).translate(_SCRIPT_ESCAPES)
    for index, function in enumerate(callbacks):
        encoded = encoded.replace(json.dumps(_placeholder(index)), function)
    return encoded

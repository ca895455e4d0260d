"""Configuration builder for a single DataTables column.

A :class:`Column` collects the options DataTables understands for one entry
of its ``columns`` array. Setters validate before storing and return the
column itself so calls can be chained::

    Column("category.name").set_title("Category").set_orderable(False)

:meth:`Column.get_config` serializes the options using the widget's own key
spelling (``cellType``, ``orderDataType``...).
"""
from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

from django.utils.text import camel_case_to_spaces, capfirst

from django_datatables.exceptions import InvalidArgumentError
from django_datatables.validation import (
    check_keys_value_types_or_fail,
    check_type_or_fail,
    in_choices_or_fail,
    non_negative_or_fail,
    validate_body_or_params,
)

TYPE_DATE = "date"
TYPE_NUM = "num"
TYPE_NUM_FMT = "num-fmt"
TYPE_HTML_NUM = "html-num"
TYPE_HTML_NUM_FMT = "html-num-fmt"
TYPE_HTML = "html"
TYPE_STRING = "string"
VALID_TYPES = (
    TYPE_DATE,
    TYPE_NUM,
    TYPE_NUM_FMT,
    TYPE_HTML_NUM,
    TYPE_HTML_NUM_FMT,
    TYPE_HTML,
    TYPE_STRING,
)

DOM_TEXT = "dom-text"
DOM_SELECT = "dom-select"
DOM_CHECKBOX = "dom-checkbox"
VALID_ORDER_DATA_TYPES = (DOM_TEXT, DOM_SELECT, DOM_CHECKBOX)

VALID_CELL_TYPES = ("td", "th")
VALID_ORDER_SEQUENCE = ("asc", "desc")

# Storage type (see tables.schema.storage_type) -> DataTables display type.
DATA_TABLES_TYPE_MAP = {
    "tinyinteger": TYPE_NUM,
    "smallinteger": TYPE_NUM,
    "integer": TYPE_NUM,
    "biginteger": TYPE_NUM,
    "binary": TYPE_STRING,
    "binaryuuid": TYPE_STRING,
    "boolean": TYPE_NUM,
    "date": TYPE_DATE,
    "datetime": TYPE_DATE,
    "datetimefractional": TYPE_DATE,
    "decimal": TYPE_NUM,
    "float": TYPE_NUM,
    "json": TYPE_STRING,
    "string": TYPE_STRING,
    "char": TYPE_STRING,
    "text": TYPE_STRING,
    "time": TYPE_DATE,
    "timestamp": TYPE_DATE,
    "timestampfractional": TYPE_DATE,
    "timestamptimezone": TYPE_DATE,
    "uuid": TYPE_STRING,
}

OrderData = Union[int, List[int], Dict[int, int]]
BodyOrParams = Union[str, Dict[str, Any]]


def humanize(value: str) -> str:
    """``created_at`` -> ``Created At``, ``firstName`` -> ``First Name``."""
    words = camel_case_to_spaces(value.replace("_", " ")).split()
    return " ".join(capfirst(word) for word in words)


def title_from_name(name: str) -> str:
    return humanize(name.rsplit(".", 1)[-1])


# --- Value sources ---


@dataclass(frozen=True)
class FieldSource:
    """A concrete field on the table's own model."""

    field_name: str
    is_database = True
    association_path = ""

    def lookup(self) -> str:
        return self.field_name


@dataclass(frozen=True)
class AssociationSource:
    """A field reached through one or more forward relations."""

    association_path: str
    field_name: str
    is_database = True

    def lookup(self) -> str:
        return "__".join(self.association_path.split(".") + [self.field_name])


@dataclass(frozen=True)
class ExpressionSource:
    """A value computed by a query expression and annotated under ``alias``.

    ``is_database`` and ``association_path`` echo what the column was built
    with; the expression decides the value either way.
    """

    alias: str
    expression: Any
    is_database: bool = False
    association_path: str = ""

    def lookup(self) -> str:
        return self.alias


@dataclass(frozen=True)
class VirtualSource:
    """No server-side value; the client renders the cell."""

    association_path: str = ""
    is_database = False

    def lookup(self) -> Optional[str]:
        return None


ValueSource = Union[FieldSource, AssociationSource, ExpressionSource, VirtualSource]


def make_source(
    name: str,
    database: bool = True,
    association_path: str = "",
    function_expression: Any = None,
) -> ValueSource:
    if function_expression is not None:
        return ExpressionSource(
            alias=name.replace(".", "_"),
            expression=function_expression,
            is_database=bool(database),
            association_path=association_path,
        )
    if not database:
        return VirtualSource(association_path=association_path)
    if association_path:
        return AssociationSource(association_path=association_path, field_name=name.rsplit(".", 1)[-1])
    return FieldSource(field_name=name)


# --- Options ---


def option(key: str, default: Any = None):
    return field(default=default, metadata={"key": key})


@dataclass
class ColumnOptions:
    """Every column option DataTables accepts; ``None`` means unset."""

    cell_type: Optional[str] = option("cellType")
    class_name: Optional[str] = option("className")
    content_padding: Optional[str] = option("contentPadding")
    created_cell: Optional[BodyOrParams] = option("createdCell")
    name: Optional[str] = option("name")
    order_data: Optional[OrderData] = option("orderData")
    order_data_type: Optional[str] = option("orderDataType")
    order_sequence: Optional[List[str]] = option("orderSequence")
    orderable: Optional[bool] = option("orderable")
    searchable: Optional[bool] = option("searchable")
    title: Optional[str] = option("title")
    type: Optional[str] = option("type")
    visible: Optional[bool] = option("visible")
    width: Optional[str] = option("width")

    def as_dict(self, only_dirty: bool = True) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if only_dirty and value is None:
                continue
            out[f.metadata["key"]] = copy.deepcopy(value)
        return out


class Column:
    """Fluent builder for one DataTables column definition."""

    def __init__(
        self,
        name: str,
        database: bool = True,
        column_schema: Optional[Mapping[str, Any]] = None,
        association_path: str = "",
        function_expression: Any = None,
    ):
        if not isinstance(name, str) or not name:
            raise InvalidArgumentError(f"Column name must be a non-empty str. Found: {name!r}.")
        self.options = ColumnOptions(name=name, title=title_from_name(name))
        self.source: ValueSource = make_source(name, database, association_path, function_expression)
        self._column_schema: Dict[str, Any] = dict(column_schema or {})
        # Unmapped storage types leave ``type`` unset.
        storage_type = self._column_schema.get("type")
        if self.source.is_database and storage_type in DATA_TABLES_TYPE_MAP:
            self.set_type(DATA_TABLES_TYPE_MAP[storage_type])

    def __repr__(self) -> str:
        return f"<Column {self.options.name!r}>"

    def get_config(self, only_dirty: bool = True, is_default_column: bool = False) -> Dict[str, Any]:
        """Serialize the options for DataTables.

        With ``only_dirty`` unset options are left out. The table-wide default
        column targets every column and carries neither ``name`` nor ``title``.
        """
        result = self.options.as_dict(only_dirty=only_dirty)
        if is_default_column:
            result["targets"] = "_all"
            result.pop("name", None)
            result.pop("title", None)
        return result

    # --- Derived fields ---

    def get_name(self) -> str:
        return self.options.name

    def get_association_path(self) -> str:
        return self.source.association_path

    def get_function_expression(self) -> Any:
        if isinstance(self.source, ExpressionSource):
            return self.source.expression
        return None

    def is_database(self) -> bool:
        return self.source.is_database

    def get_lookup(self) -> Optional[str]:
        """ORM lookup path for this column's value, if it has one."""
        return self.source.lookup()

    def get_column_schema(self, name: Optional[str] = None) -> Any:
        if not name:
            return dict(self._column_schema)
        return self._column_schema.get(name)

    # --- Options ---

    def get_cell_type(self) -> Optional[str]:
        return self.options.cell_type

    def set_cell_type(self, cell_type: Optional[str]) -> "Column":
        in_choices_or_fail(cell_type, VALID_CELL_TYPES, "cell_type")
        self.options.cell_type = cell_type
        return self

    def get_class_name(self) -> Optional[str]:
        return self.options.class_name

    def set_class_name(self, class_name: Optional[str]) -> "Column":
        check_type_or_fail(class_name, str, "class_name")
        self.options.class_name = class_name
        return self

    def get_content_padding(self) -> Optional[str]:
        return self.options.content_padding

    def set_content_padding(self, content_padding: Optional[str]) -> "Column":
        check_type_or_fail(content_padding, str, "content_padding")
        self.options.content_padding = content_padding
        return self

    def get_created_cell(self) -> Optional[BodyOrParams]:
        return self.options.created_cell

    def callback_created_cell(self, body_or_params: Optional[BodyOrParams] = None) -> "Column":
        """Set the ``createdCell`` callback.

        A ``str`` is used as the function body; a mapping is passed as context
        to the ``django_datatables/callbacks/createdCell.js`` template when the
        table is rendered. ``None`` clears the callback.
        """
        if body_or_params is not None:
            validate_body_or_params(body_or_params, "body_or_params")
            if not isinstance(body_or_params, str):
                body_or_params = dict(body_or_params)
        self.options.created_cell = body_or_params
        return self

    def get_order_data(self) -> Optional[OrderData]:
        return self.options.order_data

    def set_order_data(self, order_data: Optional[OrderData]) -> "Column":
        if isinstance(order_data, (dict, list, tuple)):
            check_keys_value_types_or_fail(order_data, int, int, "order_data")
            values = order_data.values() if isinstance(order_data, dict) else order_data
            non_negative_or_fail(list(values), "order_data")
            order_data = dict(order_data) if isinstance(order_data, dict) else list(order_data)
        elif isinstance(order_data, int) and not isinstance(order_data, bool):
            non_negative_or_fail([order_data], "order_data")
        elif order_data is not None:
            raise InvalidArgumentError(
                "In order_data you can use only int, list, dict or None. "
                f"Found: {type(order_data).__name__}."
            )
        self.options.order_data = order_data
        return self

    def get_order_data_type(self) -> Optional[str]:
        return self.options.order_data_type

    def set_order_data_type(self, order_data_type: Optional[str]) -> "Column":
        in_choices_or_fail(order_data_type, VALID_ORDER_DATA_TYPES, "order_data_type")
        self.options.order_data_type = order_data_type
        return self

    def get_order_sequence(self) -> Optional[List[str]]:
        return self.options.order_sequence

    def set_order_sequence(self, order_sequence: Optional[Sequence[str]]) -> "Column":
        if order_sequence is not None:
            if not isinstance(order_sequence, (list, tuple)):
                raise InvalidArgumentError(
                    f"order_sequence must be a list or tuple. Found: {type(order_sequence).__name__}."
                )
            check_keys_value_types_or_fail(order_sequence, int, str, "order_sequence")
            for item in order_sequence:
                if item not in VALID_ORDER_SEQUENCE:
                    raise InvalidArgumentError(
                        f"In order_sequence you can use only 'asc' or 'desc'. Found: {item!r}."
                    )
            order_sequence = list(order_sequence)
        self.options.order_sequence = order_sequence
        return self

    def is_orderable(self) -> Optional[bool]:
        return self.options.orderable

    def set_orderable(self, orderable: Optional[bool]) -> "Column":
        check_type_or_fail(orderable, bool, "orderable")
        self.options.orderable = orderable
        return self

    def is_searchable(self) -> Optional[bool]:
        return self.options.searchable

    def set_searchable(self, searchable: Optional[bool]) -> "Column":
        check_type_or_fail(searchable, bool, "searchable")
        self.options.searchable = searchable
        return self

    def get_title(self) -> str:
        return self.options.title

    def set_title(self, title: str) -> "Column":
        check_type_or_fail(title, str, "title", allow_none=False)
        self.options.title = title
        return self

    def get_type(self) -> Optional[str]:
        return self.options.type

    def set_type(self, type: Optional[str]) -> "Column":
        in_choices_or_fail(type, VALID_TYPES, "type")
        self.options.type = type
        return self

    def is_visible(self) -> Optional[bool]:
        return self.options.visible

    def set_visible(self, visible: Optional[bool]) -> "Column":
        check_type_or_fail(visible, bool, "visible")
        self.options.visible = visible
        return self

    def get_width(self) -> Optional[str]:
        return self.options.width

    def set_width(self, width: Optional[str]) -> "Column":
        check_type_or_fail(width, str, "width")
        self.options.width = width
        return self

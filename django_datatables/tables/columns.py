from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

from django.db import models

from django_datatables.exceptions import InvalidArgumentError
from django_datatables.tables.column import Column
from django_datatables.tables.schema import get_column_schema

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_NAME = "_default"


class Columns:
    """Ordered set of columns for one table plus the table-wide default column.

    Database columns are resolved against ``model``; dotted names such as
    ``category.name`` follow forward relations.
    """

    def __init__(self, model: Optional[type[models.Model]] = None):
        self.model = model
        self.default = Column(DEFAULT_COLUMN_NAME, database=False)
        self._columns: List[Column] = []

    def __iter__(self) -> Iterator[Column]:
        return iter(self._columns)

    def __len__(self) -> int:
        return len(self._columns)

    def __contains__(self, name: str) -> bool:
        return any(c.get_name() == name for c in self._columns)

    def _append(self, column: Column) -> Column:
        if column.get_name() in self:
            raise InvalidArgumentError(f"Column {column.get_name()!r} is already defined.")
        self._columns.append(column)
        logger.debug("Added column %s (%s)", column.get_name(), type(column.source).__name__)
        return column

    def add_database_column(self, name: str) -> Column:
        if self.model is None:
            raise InvalidArgumentError(f"Cannot add database column {name!r} without a model.")
        schema = get_column_schema(self.model, name)
        association_path = name.rsplit(".", 1)[0] if "." in name else ""
        return self._append(
            Column(name, database=True, column_schema=schema, association_path=association_path)
        )

    def add_non_database_column(self, name: str) -> Column:
        return self._append(Column(name, database=False))

    def add_expression_column(self, name: str, expression: Any) -> Column:
        if expression is None:
            raise InvalidArgumentError(f"Expression column {name!r} needs an expression.")
        return self._append(Column(name, database=False, function_expression=expression))

    def get_column(self, name: str) -> Column:
        for column in self._columns:
            if column.get_name() == name:
                return column
        raise InvalidArgumentError(f"Column {name!r} is not defined.")

    def get_index(self, name: str) -> int:
        for index, column in enumerate(self._columns):
            if column.get_name() == name:
                return index
        raise InvalidArgumentError(f"Column {name!r} is not defined.")

    def remove_column(self, name: str) -> None:
        self._columns.pop(self.get_index(name))

    def get_config(self, only_dirty: bool = True) -> Dict[str, Any]:
        """Return the ``columns`` array and, if anything is set, ``columnDefs``."""
        config: Dict[str, Any] = {
            "columns": [c.get_config(only_dirty=only_dirty) for c in self._columns],
        }
        default = self.default.get_config(only_dirty=only_dirty, is_default_column=True)
        if only_dirty is False or set(default) != {"targets"}:
            config["columnDefs"] = [default]
        return config

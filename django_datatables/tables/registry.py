"""Central registry for table definitions."""

import logging

from django_datatables.exceptions import TableNotFound

from .base import DataTable

logger = logging.getLogger(__name__)


class TableRegistry:
    """Store table definitions by identifier.

    The registry prevents duplicate registrations. Consumers look a table up
    by its identifier or iterate over all registered tables.
    """

    def __init__(self):
        self._tables = {}

    def register(self, table):
        """Register ``table`` under its ``id``.

        Accepts a :class:`DataTable` instance or subclass. Raises
        ``ValueError`` for a duplicate or empty id or a missing model, and
        ``TypeError`` if ``table`` is not a ``DataTable``.
        """
        if isinstance(table, type):
            table = table()
        if not isinstance(table, DataTable):
            raise TypeError("table must subclass DataTable")
        if not table.id:
            raise ValueError(f"{table.__class__.__name__}.id is required")
        if table.model is None:
            raise ValueError(f"{table.__class__.__name__}.model is required")
        if table.id in self._tables:
            raise ValueError(f"Table '{table.id}' is already registered")
        self._tables[table.id] = table
        logger.debug("Registered DataTable %s (%s)", table.id, table.__class__.__name__)
        return table

    def unregister(self, table_id):
        self._tables.pop(table_id, None)

    def get(self, table_id):
        """Return the table registered under ``table_id``.

        Raises :class:`TableNotFound` when nothing is registered under it.
        """
        try:
            return self._tables[table_id]
        except KeyError:
            raise TableNotFound(f"Table '{table_id}' is not registered") from None

    def all(self):
        """Return a copy of the internal registry mapping ids to tables."""
        return dict(self._tables)


# Global registry instance used throughout the project.
table_registry = TableRegistry()


def register(table):
    """Class decorator registering a DataTable subclass with the global registry."""
    table_registry.register(table)
    return table


def get_table(table_id):
    """Return the globally registered table ``table_id`` or raise :class:`TableNotFound`."""
    return table_registry.get(table_id)


def get_registry():
    return table_registry.all()


__all__ = ["TableRegistry", "table_registry", "register", "get_table", "get_registry"]

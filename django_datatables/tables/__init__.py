from .base import DataTable
from .column import Column
from .columns import Columns
from .registry import get_registry, get_table, register, table_registry

__all__ = ["Column", "Columns", "DataTable", "get_registry", "get_table", "register", "table_registry"]

"""Django DataTables reusable application."""

from .conf import settings

__all__ = ["settings"]

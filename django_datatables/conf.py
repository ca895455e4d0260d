"""Typed access to the ``DATATABLES_*`` Django settings.

Every property reads the live Django setting on each access, so
``override_settings`` in tests takes effect immediately. A malformed value
raises :class:`~django.core.exceptions.ImproperlyConfigured` naming the
setting.
"""
from __future__ import annotations

from typing import Any, Dict, List

from django.conf import settings as django_settings
from django.core.exceptions import ImproperlyConfigured

__all__ = ["settings", "DataTablesSettings", "DEFAULTS"]

DATATABLES_CDN = "https://cdn.datatables.net/2.1.8"

DEFAULTS: Dict[str, Any] = {
    "DATATABLES_TABLES": [],
    "DATATABLES_DEFAULT_OPTIONS": {
        "pageLength": 10,
        "lengthMenu": [10, 25, 50, 100],
        "processing": True,
    },
    "DATATABLES_MAX_PAGE_LENGTH": 1000,
    "DATATABLES_LOGIN_REQUIRED": True,
    "DATATABLES_JS_URL": f"{DATATABLES_CDN}/js/dataTables.min.js",
    "DATATABLES_CSS_URL": f"{DATATABLES_CDN}/css/dataTables.dataTables.min.css",
}


class DataTablesSettings:
    """Reads the app's settings, falling back to :data:`DEFAULTS`."""

    def _get(self, name: str) -> Any:
        return getattr(django_settings, name, DEFAULTS[name])

    @property
    def tables(self) -> List[str]:
        """Entry points imported when the app is ready."""
        value = self._get("DATATABLES_TABLES")
        if isinstance(value, str) or not all(isinstance(entry, str) for entry in value):
            raise ImproperlyConfigured("DATATABLES_TABLES must be a list of 'module' or 'module:callable' strings.")
        return list(value)

    @property
    def default_options(self) -> Dict[str, Any]:
        value = self._get("DATATABLES_DEFAULT_OPTIONS") or {}
        if not isinstance(value, dict):
            raise ImproperlyConfigured("DATATABLES_DEFAULT_OPTIONS must be a dict.")
        return dict(value)

    @property
    def max_page_length(self) -> int:
        value = self._get("DATATABLES_MAX_PAGE_LENGTH")
        try:
            length = int(value)
        except (TypeError, ValueError):
            raise ImproperlyConfigured(
                f"DATATABLES_MAX_PAGE_LENGTH must be an integer. Found: {value!r}."
            ) from None
        if isinstance(value, bool) or length <= 0:
            raise ImproperlyConfigured(f"DATATABLES_MAX_PAGE_LENGTH must be positive. Found: {value!r}.")
        return length

    @property
    def login_required(self) -> bool:
        return bool(self._get("DATATABLES_LOGIN_REQUIRED"))

    @property
    def js_url(self) -> str:
        return self._get("DATATABLES_JS_URL")

    @property
    def css_url(self) -> str:
        return self._get("DATATABLES_CSS_URL")


settings = DataTablesSettings()

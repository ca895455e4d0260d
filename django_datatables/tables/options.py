from __future__ import annotations

import logging
from typing import Any, Dict

logger = logging.getLogger(__name__)


# Allowlist of DataTables table options accepted from settings and table classes
ALLOWED_OPTIONS = {
    "autoWidth": bool,
    "deferRender": bool,
    "info": bool,
    "lengthChange": bool,
    "lengthMenu": (list, tuple),
    "order": (list, tuple),  # [[column index, 'asc' | 'desc'], ...]
    "ordering": bool,
    "pageLength": int,
    "paging": bool,
    "pagingType": str,  # 'simple' | 'simple_numbers' | 'full' | 'full_numbers' ...
    "processing": bool,
    "scrollCollapse": bool,
    "scrollX": bool,
    "scrollY": str,  # CSS height, e.g. '50vh'
    "searchDelay": int,
    "searching": bool,
    "serverSide": bool,
    "stateSave": bool,
    "language": dict,
}


def coerce_value(expected, value):
    if expected is int:
        if isinstance(value, bool):
            raise ValueError
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ValueError from None
    if expected is str:
        return str(value)
    if expected is bool:
        if isinstance(value, bool):
            return value
        if str(value).lower() in {"1", "true", "yes", "on"}:
            return True
        if str(value).lower() in {"0", "false", "no", "off"}:
            return False
        raise ValueError
    if expected in (list, tuple):
        if isinstance(value, (list, tuple)):
            return list(value)
        raise ValueError
    if expected is dict:
        if isinstance(value, dict):
            return dict(value)
        raise ValueError
    if isinstance(expected, tuple):  # union of types
        for t in expected:
            try:
                return coerce_value(t, value)
            except ValueError:
                continue
        raise ValueError
    return value


def merge_table_options(*sources: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge allowlisted DataTables options from sources left→right."""
    out: Dict[str, Any] = {}
    for src in sources:
        if not src:
            continue
        for k, v in src.items():
            if k not in ALLOWED_OPTIONS:
                logger.warning("Ignoring unknown DataTables option %r", k)
                continue
            try:
                out[k] = coerce_value(ALLOWED_OPTIONS[k], v)
            except ValueError:
                logger.warning("Ignoring invalid value %r for DataTables option %r", v, k)
                continue
    return out

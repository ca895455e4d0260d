"""Server-side processing for DataTables requests.

Implements the request/response contract of DataTables' ``serverSide`` mode:
the client sends ``draw``, ``start``, ``length``, ``search[value]``,
``order[i][column]``/``order[i][dir]`` and ``columns[i][...]``; the server
answers with ``draw``, ``recordsTotal``, ``recordsFiltered`` and ``data``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, time
from functools import reduce
from operator import or_
from typing import Any, Dict, List, Mapping, Optional, Tuple

from django.db import models
from django.db.models import Q

from django_datatables.conf import settings
from django_datatables.tables.column import AssociationSource, Column, ExpressionSource, FieldSource
from django_datatables.tables.columns import Columns
from django_datatables.tables.schema import resolve_field

logger = logging.getLogger(__name__)

DEFAULT_LENGTH = 10


def _to_int(value: Any, default: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return default


def _to_bool(value: Any, default: bool = True) -> bool:
    if value is None or value == "":
        return default
    return str(value).lower() in {"1", "true", "yes", "on"}


@dataclass
class ColumnRequest:
    data: str = ""
    name: str = ""
    searchable: bool = True
    orderable: bool = True
    search_value: str = ""


@dataclass
class DataTablesRequest:
    draw: int = 0
    start: int = 0
    length: int = DEFAULT_LENGTH
    search_value: str = ""
    search_regex: bool = False
    order: List[Tuple[int, str]] = field(default_factory=list)
    columns: List[ColumnRequest] = field(default_factory=list)


def parse_request(params: Mapping[str, Any], max_length: Optional[int] = None) -> DataTablesRequest:
    """Read DataTables' server-side parameters from ``params``.

    Malformed numbers fall back to defaults. ``length`` is capped by
    ``max_length`` (``DATATABLES_MAX_PAGE_LENGTH`` by default); ``-1`` asks
    for every row and is capped as well.
    """
    if max_length is None:
        max_length = settings.max_page_length

    length = _to_int(params.get("length"), DEFAULT_LENGTH)
    if length == -1 or length > max_length:
        length = max_length
    elif length <= 0:
        length = DEFAULT_LENGTH

    columns: List[ColumnRequest] = []
    index = 0
    while f"columns[{index}][data]" in params or f"columns[{index}][name]" in params:
        prefix = f"columns[{index}]"
        columns.append(
            ColumnRequest(
                data=str(params.get(f"{prefix}[data]", "") or ""),
                name=str(params.get(f"{prefix}[name]", "") or ""),
                searchable=_to_bool(params.get(f"{prefix}[searchable]")),
                orderable=_to_bool(params.get(f"{prefix}[orderable]")),
                search_value=str(params.get(f"{prefix}[search][value]", "") or "").strip(),
            )
        )
        index += 1

    order: List[Tuple[int, str]] = []
    index = 0
    while f"order[{index}][column]" in params:
        column_index = _to_int(params.get(f"order[{index}][column]"), -1)
        direction = str(params.get(f"order[{index}][dir]", "asc")).lower()
        if column_index >= 0:
            order.append((column_index, "desc" if direction == "desc" else "asc"))
        index += 1

    return DataTablesRequest(
        draw=max(_to_int(params.get("draw"), 0), 0),
        start=max(_to_int(params.get("start"), 0), 0),
        length=length,
        search_value=str(params.get("search[value]", "") or "").strip(),
        search_regex=_to_bool(params.get("search[regex]"), default=False),
        order=order,
        columns=columns,
    )


class QueryProcessor:
    """Filters, orders, pages and serializes a queryset for one table."""

    def __init__(self, columns: Columns):
        self.columns = list(columns)

    def _client_column(self, request: DataTablesRequest, index: int) -> ColumnRequest:
        if index < len(request.columns):
            return request.columns[index]
        return ColumnRequest()

    def _related_paths(self, model) -> List[str]:
        paths = set()
        for column in self.columns:
            source = column.source
            if isinstance(source, AssociationSource):
                paths.add(source.association_path.replace(".", "__"))
            # Foreign key columns render the related object itself.
            if isinstance(source, (FieldSource, AssociationSource)) and column.get_column_schema("relation"):
                _, field = resolve_field(model, column.get_name())
                if not field.many_to_many:
                    paths.add(column.get_lookup())
        return sorted(paths)

    def annotate(self, queryset):
        annotations = {
            c.source.alias: c.source.expression
            for c in self.columns
            if isinstance(c.source, ExpressionSource)
        }
        if annotations:
            queryset = queryset.annotate(**annotations)
        related = self._related_paths(queryset.model)
        if related:
            queryset = queryset.select_related(*related)
        return queryset

    def searchable_lookups(self, request: DataTablesRequest) -> List[Tuple[int, str]]:
        lookups = []
        for index, column in enumerate(self.columns):
            lookup = column.get_lookup()
            if lookup is None or column.is_searchable() is False:
                continue
            # Text lookups do not apply to the relation itself.
            if column.get_column_schema("relation"):
                continue
            if not self._client_column(request, index).searchable:
                continue
            lookups.append((index, lookup))
        return lookups

    def filter(self, queryset, request: DataTablesRequest):
        lookups = self.searchable_lookups(request)
        if request.search_value and lookups:
            condition = reduce(or_, (Q(**{f"{lookup}__icontains": request.search_value}) for _, lookup in lookups))
            queryset = queryset.filter(condition)
        for index, lookup in lookups:
            value = self._client_column(request, index).search_value
            if value:
                queryset = queryset.filter(**{f"{lookup}__icontains": value})
        return queryset

    def order(self, queryset, request: DataTablesRequest):
        ordering = []
        for index, direction in request.order:
            if index >= len(self.columns):
                continue
            column = self.columns[index]
            lookup = column.get_lookup()
            if lookup is None or column.is_orderable() is False:
                continue
            if not self._client_column(request, index).orderable:
                continue
            ordering.append(f"-{lookup}" if direction == "desc" else lookup)
        if ordering:
            # Stable pages need a total order.
            queryset = queryset.order_by(*ordering, "pk")
        elif not queryset.ordered:
            queryset = queryset.order_by("pk")
        return queryset

    def _get_value(self, obj: Any, column: Column):
        lookup = column.get_lookup()
        if lookup is None:
            return None
        cur = obj
        names = [lookup] if isinstance(column.source, ExpressionSource) else lookup.split("__")
        for name in names:
            if cur is None:
                return None
            cur = getattr(cur, name, None)
        # Normalize common types
        if isinstance(cur, (date, datetime, time)):
            return cur.isoformat()
        if isinstance(cur, models.Model):
            return str(cur)
        return cur

    def serialize_row(self, obj: Any) -> List[Any]:
        row = []
        for column in self.columns:
            value = self._get_value(obj, column)
            row.append(value if value is not None else "")
        return row

    def process(self, queryset, request: DataTablesRequest) -> Dict[str, Any]:
        queryset = self.annotate(queryset)
        records_total = queryset.count()
        queryset = self.filter(queryset, request)
        records_filtered = queryset.count() if request.search_value or any(
            c.search_value for c in request.columns
        ) else records_total
        queryset = self.order(queryset, request)
        page = queryset[request.start : request.start + request.length]
        data = [self.serialize_row(obj) for obj in page]
        logger.debug(
            "DataTables draw %s: %s/%s records, %s returned",
            request.draw,
            records_filtered,
            records_total,
            len(data),
        )
        return {
            "draw": request.draw,
            "recordsTotal": records_total,
            "recordsFiltered": records_filtered,
            "data": data,
        }

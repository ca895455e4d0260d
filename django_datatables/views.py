from __future__ import annotations

import logging
from functools import wraps

from django.contrib.auth.views import redirect_to_login
from django.http import Http404, HttpRequest, HttpResponse, JsonResponse
from django.shortcuts import render
from django.views.decorators.http import require_GET

from django_datatables.controller import DataTableController
from django_datatables.exceptions import TableNotFound
from django_datatables.processor import QueryProcessor, parse_request
from django_datatables.tables.registry import get_table

logger = logging.getLogger(__name__)


def table_view(view):
    """Resolve ``table_id`` to a registered table and enforce its login policy."""

    @wraps(view)
    def wrapper(request: HttpRequest, table_id: str, *args, **kwargs):
        try:
            table = get_table(table_id)
        except TableNotFound:
            raise Http404("Unknown table") from None
        if table.requires_login() and not request.user.is_authenticated:
            return redirect_to_login(request.get_full_path())
        return view(request, table, *args, **kwargs)

    return wrapper


@require_GET
@table_view
def render_table(request: HttpRequest, table) -> HttpResponse:
    """Render the table partial (markup plus initialisation script)."""
    ctx = DataTableController(table).build_context(request)
    return render(request, table.template_name, ctx)


@require_GET
@table_view
def table_data(request: HttpRequest, table) -> JsonResponse:
    """JSON endpoint for DataTables server-side processing."""
    dt_request = parse_request(request.GET)
    processor = QueryProcessor(table.get_columns())
    payload = processor.process(table.get_queryset(request), dt_request)
    logger.debug("Served %s rows for table %s", len(payload["data"]), table.id)
    return JsonResponse(payload)

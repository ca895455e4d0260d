"""Template tags rendering DataTables assets and tables."""
from __future__ import annotations

import logging

from django import template
from django.template.loader import render_to_string
from django.utils.html import format_html

from django_datatables.conf import settings
from django_datatables.controller import DataTableController
from django_datatables.tables.registry import get_table

logger = logging.getLogger(__name__)

register = template.Library()


@register.simple_tag
def datatables_assets():
    """Stylesheet and script includes for the DataTables client library."""
    return format_html(
        '<link rel="stylesheet" href="{}">\n<script src="{}"></script>',
        settings.css_url,
        settings.js_url,
    )


@register.simple_tag(takes_context=True)
def datatable(context, table_id):
    """Render the registered table ``table_id`` with its initialisation script.

    Renders nothing when the table requires login and the request has no
    authenticated user.
    """
    table = get_table(table_id)
    request = context.get("request")
    if table.requires_login():
        user = getattr(request, "user", None)
        if user is None or not user.is_authenticated:
            logger.debug("Skipped table %s for anonymous request", table_id)
            return ""
    ctx = DataTableController(table).build_context(request)
    return render_to_string(table.template_name, ctx, request=request)

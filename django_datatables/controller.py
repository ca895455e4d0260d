from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from django.http import HttpRequest
from django.urls import reverse

from django_datatables.callbacks import dumps_config
from django_datatables.processor import QueryProcessor
from django_datatables.tables.base import DataTable


@dataclass
class DataTableController:
    table: DataTable

    def dom_id(self) -> str:
        return f"dt-{self.table.id.replace('.', '-')}"

    def build_config(self, request: Optional[HttpRequest] = None) -> Dict[str, Any]:
        """Assemble the options object passed to ``new DataTable(...)``.

        Server-side tables point ``ajax`` at the data endpoint; client-side
        tables embed every row under ``data``.
        """
        columns = self.table.get_columns()
        config: Dict[str, Any] = dict(self.table.get_options())
        config.update(columns.get_config())
        if self.table.server_side:
            config["serverSide"] = True
            config["ajax"] = {
                "url": reverse("datatables:table_data", args=[self.table.id]),
                "type": "GET",
            }
        else:
            processor = QueryProcessor(columns)
            queryset = processor.annotate(self.table.get_queryset(request))
            config["data"] = [processor.serialize_row(obj) for obj in queryset]
        return config

    def build_context(self, request: HttpRequest) -> Dict[str, Any]:
        dom_base = self.dom_id()
        config = self.build_config(request)
        return {
            "title": self.table.get_title(),
            "table_id": self.table.id,
            "dom_id": dom_base,
            "dom_table_id": f"{dom_base}-table",
            "dom_wrapper_id": f"{dom_base}-card",
            "refresh_url": reverse("datatables:render_table", args=[self.table.id]),
            "data_url": reverse("datatables:table_data", args=[self.table.id]),
            "columns": config.get("columns", []),
            "config": config,
            "config_js": dumps_config(config),
        }

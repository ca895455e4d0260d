from abc import ABC, abstractmethod

from django_datatables.conf import settings
from django_datatables.tables.columns import Columns
from django_datatables.tables.options import merge_table_options


class DataTable(ABC):
    """Base interface for table definitions.

    Subclasses name the model they list and configure their columns in
    :meth:`configure_columns`. The column collection is rebuilt on every call
    to :meth:`get_columns` so per-request state never leaks between requests.
    """

    id = ""
    model = None
    title = ""
    template_name = "django_datatables/table.html"
    options: dict = {}
    server_side = True
    login_required = None

    @abstractmethod
    def configure_columns(self, columns: Columns) -> None:
        """Add and configure the table's columns."""

    def get_title(self):
        if self.title:
            return self.title
        if self.model is not None:
            return str(self.model._meta.verbose_name_plural).capitalize()
        return self.id

    def get_queryset(self, request):
        return self.model._default_manager.all()

    def get_columns(self) -> Columns:
        columns = Columns(self.model)
        self.configure_columns(columns)
        return columns

    def get_options(self) -> dict:
        return merge_table_options(
            settings.default_options,
            self.options or {},
        )

    def requires_login(self) -> bool:
        if self.login_required is None:
            return settings.login_required
        return bool(self.login_required)

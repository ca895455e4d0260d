import logging
from importlib import import_module

from django.apps import AppConfig
from django_datatables.conf import settings

logger = logging.getLogger(__name__)


class DjangoDataTablesConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "django_datatables"
    verbose_name = "Django DataTables"

    def ready(self):
        from .tables.registry import table_registry

        # Each entry is either a module that registers on import, or
        # "module:callable" receiving the registry.
        for entry in settings.tables:
            try:
                module_path, callable_name = entry.split(":", 1)
            except ValueError:
                import_module(entry)
            else:
                module = import_module(module_path)
                registrar = getattr(module, callable_name)
                registrar(table_registry)
            logger.debug("Loaded DataTables entry point %s", entry)

import json
import logging

from django.core.management.base import BaseCommand, CommandError

from django_datatables.exceptions import TableNotFound
from django_datatables.tables.registry import get_registry, get_table

logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Print the DataTables column configuration of a registered table"

    def add_arguments(self, parser):
        parser.add_argument("table_id", nargs="?", help="Registered table id (omit to list tables)")
        parser.add_argument(
            "--full",
            action="store_true",
            help="Include unset options instead of only the ones that were set",
        )

    def handle(self, *args, **options):
        table_id = options.get("table_id")
        if not table_id:
            for key, table in sorted(get_registry().items()):
                self.stdout.write(f"{key}\t{table.__class__.__name__}")
            return
        try:
            table = get_table(table_id)
        except TableNotFound as exc:
            raise CommandError(str(exc)) from exc
        config = table.get_columns().get_config(only_dirty=not options.get("full"))
        logger.debug("Dumping column configuration for %s", table_id)
        self.stdout.write(json.dumps(config, indent=2, default=str))

"""Write every language line to an .xlsx file."""
from django.core.management.base import BaseCommand, CommandError

from language_lines.conf import get_capabilities
from language_lines.exceptions import SpreadsheetExportError
from language_lines.spreadsheets import EXPORT_FILENAME, export_language_lines
from language_lines.utils.logging_config import setup_logging


class Command(BaseCommand):
    help = "Export language lines to a spreadsheet."

    def add_arguments(self, parser):
        parser.add_argument("output", nargs="?", default=EXPORT_FILENAME, help="Destination .xlsx path.")

    def handle(self, *args, **options):
        setup_logging(options["verbosity"])
        try:
            export_language_lines(options["output"], configured_locales=get_capabilities().locales)
        except SpreadsheetExportError as e:
            raise CommandError(str(e)) from e
        except OSError as e:
            raise CommandError(f"Cannot write {options['output']}: {e}") from e
        self.stdout.write(self.style.SUCCESS(f"Exported language lines to {options['output']}."))

"""Import language lines from an .xlsx file."""
from django.core.management.base import BaseCommand, CommandError

from language_lines.exceptions import LanguagePanelError
from language_lines.spreadsheets import import_language_lines
from language_lines.utils.logging_config import setup_logging


class Command(BaseCommand):
    help = "Import language lines from a spreadsheet."

    def add_arguments(self, parser):
        parser.add_argument("path", help="Spreadsheet to import.")
        parser.add_argument("--truncate", action="store_true",
                            help="Delete every language line before importing.")
        parser.add_argument("--no-overwrite", dest="overwrite", action="store_false",
                            help="Only fill in missing translations on existing lines.")

    def handle(self, *args, **options):
        setup_logging(options["verbosity"])
        try:
            report = import_language_lines(
                options["path"],
                truncate=options["truncate"],
                overwrite=options["overwrite"],
            )
        except LanguagePanelError as e:
            raise CommandError(str(e)) from e
        self.stdout.write(self.style.SUCCESS(f"Done processing import file: {report}."))

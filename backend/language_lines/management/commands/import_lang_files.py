"""Run the lang-file import job from the command line or a scheduler."""
from django.core.management.base import BaseCommand, CommandError

from language_lines.exceptions import LanguagePanelError
from language_lines.jobs import ImportFromLangFiles
from language_lines.utils.logging_config import setup_logging


class Command(BaseCommand):
    help = "Import language lines from the source translation files."

    def add_arguments(self, parser):
        parser.add_argument("--overwrite", action="store_true",
                            help="Replace existing translations with the file values.")
        parser.add_argument("--truncate", action="store_true",
                            help="Delete every language line before importing.")
        parser.add_argument("--lang-path", default=None,
                            help="Directory holding the translation files (defaults to LANGUAGE_PANEL['LANG_PATH']).")

    def handle(self, *args, **options):
        setup_logging(options["verbosity"])
        job = ImportFromLangFiles(
            overwrite=options["overwrite"],
            truncate=options["truncate"],
            lang_path=options["lang_path"],
            progress=options["verbosity"] > 0,
        )
        try:
            report = job.handle()
        except LanguagePanelError as e:
            raise CommandError(str(e)) from e
        self.stdout.write(self.style.SUCCESS(f"Done processing lang files: {report}."))

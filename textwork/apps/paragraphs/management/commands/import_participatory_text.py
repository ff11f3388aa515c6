"""Import a markdown document into a participatory text."""

from pathlib import Path

from django.conf import settings
from django.core.management.base import BaseCommand, CommandError

from textwork.apps.paragraphs.importer import import_markdown
from textwork.apps.paragraphs.models import ParticipatoryText
from textwork.logging import bind_log_context, reset_log_context


class Command(BaseCommand):
    help = "Replace the paragraphs of a participatory text with the blocks of a markdown file"

    def add_arguments(self, parser):
        parser.add_argument("slug", help="Slug of the participatory text")
        parser.add_argument("path", type=Path, help="Markdown file to import")
        parser.add_argument(
            "--locale",
            default=settings.LANGUAGE_CODE,
            help="Locale the document is written in (default: %(default)s)",
        )

    def handle(self, *args, **options):
        slug = options["slug"]
        path: Path = options["path"]

        try:
            component = ParticipatoryText.objects.get(slug=slug)
        except ParticipatoryText.DoesNotExist as exc:
            raise CommandError(f"Participatory text not found: {slug}") from exc

        try:
            markdown_text = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise CommandError(f"Cannot read {path}: {exc}") from exc

        token = bind_log_context(component=slug, source=str(path))
        try:
            paragraphs = import_markdown(component, markdown_text, locale=options["locale"])
        finally:
            reset_log_context(token)

        for paragraph in paragraphs:
            self.stdout.write(f"{paragraph.get_participatory_text_level_display()}: {paragraph}")
        self.stdout.write(self.style.SUCCESS(f"Imported {len(paragraphs)} paragraphs."))

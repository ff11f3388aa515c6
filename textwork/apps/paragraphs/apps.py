from django.apps import AppConfig


class ParagraphsConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "textwork.apps.paragraphs"
    verbose_name = "Paragraphs"

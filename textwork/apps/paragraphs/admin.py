from django.contrib import admin
from simple_history.admin import SimpleHistoryAdmin

from .models import Coauthorship, Paragraph, ParticipatoryText


class CoauthorshipInline(admin.TabularInline):
    model = Coauthorship
    extra = 0
    fields = ("author", "user_group", "created_at")
    readonly_fields = ("created_at",)
    autocomplete_fields = ("user_group",)


@admin.register(ParticipatoryText)
class ParticipatoryTextAdmin(SimpleHistoryAdmin):
    list_display = ("__str__", "slug", "hide_participatory_text_titles_enabled", "updated_at")
    search_fields = ("slug",)
    readonly_fields = ("created_at", "updated_at")


@admin.register(Paragraph)
class ParagraphAdmin(SimpleHistoryAdmin):
    list_display = ("__str__", "component", "position", "participatory_text_level", "state")
    list_filter = ("component", "participatory_text_level", "state", "official")
    readonly_fields = ("created_at", "updated_at")
    inlines = (CoauthorshipInline,)

    fieldsets = (
        (None, {"fields": ("component", "title", "body", "position", "participatory_text_level")}),
        ("Moderation", {"fields": ("state", "state_published_at", "official")}),
        (
            "Metadata",
            {
                "fields": ("created_at", "updated_at"),
                "classes": ("collapse",),
            },
        ),
    )

"""Read-only paragraph pages."""

from __future__ import annotations

from django.views.generic import DetailView

from .diff import DiffRenderer
from .models import Paragraph
from .presenters import ParagraphPresenter


class ParagraphDetailView(DetailView):
    """Paragraph page: title, author, body and a link to its history."""

    template_name = "paragraphs/paragraph_detail.html"
    context_object_name = "paragraph"

    def get_queryset(self):
        return Paragraph.objects.select_related("component").filter(
            component__slug=self.kwargs["component_slug"]
        )

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["presenter"] = ParagraphPresenter(self.object)
        return context


class ParagraphVersionListView(ParagraphDetailView):
    """Paragraph history as participants may see it."""

    template_name = "paragraphs/paragraph_versions.html"

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["versions"] = [
            {"entry": entry, "diff": DiffRenderer(entry).diff()}
            for entry in context["presenter"].versions()
        ]
        return context

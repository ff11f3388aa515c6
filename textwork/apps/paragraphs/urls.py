from django.urls import path

from .views import ParagraphDetailView, ParagraphVersionListView

urlpatterns = [
    path(
        "texts/<slug:component_slug>/paragraphs/<int:pk>/",
        ParagraphDetailView.as_view(),
        name="paragraph-detail",
    ),
    path(
        "texts/<slug:component_slug>/paragraphs/<int:pk>/versions/",
        ParagraphVersionListView.as_view(),
        name="paragraph-versions",
    ),
]

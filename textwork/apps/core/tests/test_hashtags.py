"""Tests for hashtag storage and rendering."""

from django.test import TestCase, override_settings, tag

from textwork.apps.core.hashtags import (
    convert_authoring_to_storage,
    hashtag_search_url,
    render_hashtags,
)
from textwork.apps.core.models import Hashtag


@tag("unit")
class ConvertAuthoringToStorageTests(TestCase):
    """#Name -> [[hashtag:N]] conversion on save."""

    def test_hashtag_becomes_reference(self):
        result = convert_authoring_to_storage("Let's talk about #parks")

        hashtag = Hashtag.objects.get(name="parks")
        self.assertEqual(result, f"Let's talk about [[hashtag:{hashtag.pk}]]")

    def test_existing_hashtag_is_matched_case_insensitively(self):
        hashtag = Hashtag.objects.create(name="Parks")

        result = convert_authoring_to_storage("#parks and #PARKS")

        self.assertEqual(result, f"[[hashtag:{hashtag.pk}]] and [[hashtag:{hashtag.pk}]]")
        self.assertEqual(Hashtag.objects.count(), 1)

    def test_non_hashtags_are_left_alone(self):
        text = 'foo#bar &#39; <a href="/page#top">#</a> #_private'
        self.assertEqual(convert_authoring_to_storage(text), text)
        self.assertFalse(Hashtag.objects.exists())

    def test_hashtags_inside_tags_are_left_alone(self):
        text = '<a href="#intro" title="#note">#intro</a>'

        result = convert_authoring_to_storage(text)

        intro = Hashtag.objects.get(name="intro")
        self.assertEqual(result, f'<a href="#intro" title="#note">[[hashtag:{intro.pk}]]</a>')
        self.assertFalse(Hashtag.objects.filter(name="note").exists())

    def test_extras_are_appended(self):
        result = convert_authoring_to_storage("Text", extras=["#budget", "2024"])

        budget = Hashtag.objects.get(name="budget")
        year = Hashtag.objects.get(name="2024")
        self.assertEqual(
            result, f"Text [[hashtag:{budget.pk}:extra]] [[hashtag:{year.pk}:extra]]"
        )

    def test_extras_already_referenced_are_not_repeated(self):
        result = convert_authoring_to_storage("About #budget", extras=["budget"])

        budget = Hashtag.objects.get(name="budget")
        self.assertEqual(result, f"About [[hashtag:{budget.pk}]]")

    def test_empty_text_with_extras(self):
        result = convert_authoring_to_storage("", extras=["budget"])

        budget = Hashtag.objects.get(name="budget")
        self.assertEqual(result, f"[[hashtag:{budget.pk}:extra]]")

    def test_none_becomes_empty(self):
        self.assertEqual(convert_authoring_to_storage(None), "")


@tag("unit")
class RenderHashtagsTests(TestCase):
    """[[hashtag:N]] rendering for display."""

    def setUp(self):
        self.parks = Hashtag.objects.create(name="parks")
        self.budget = Hashtag.objects.create(name="budget")

    def test_renders_links(self):
        result = render_hashtags(f"About [[hashtag:{self.parks.pk}]]")

        self.assertEqual(
            result, 'About <a class="hashtag-mention" href="/search?term=%23parks">#parks</a>'
        )

    def test_renders_plain_names_without_links(self):
        result = render_hashtags(f"About [[hashtag:{self.parks.pk}]]", links=False)
        self.assertEqual(result, "About #parks")

    def test_extras_can_be_removed(self):
        text = f"About [[hashtag:{self.parks.pk}]] [[hashtag:{self.budget.pk}:extra]]"

        self.assertEqual(render_hashtags(text, links=False), "About #parks #budget")
        self.assertEqual(render_hashtags(text, links=False, extras=False), "About #parks")

    def test_unknown_hashtag_renders_empty(self):
        with self.assertLogs("textwork.apps.core.hashtags", level="WARNING") as logs:
            result = render_hashtags("Before [[hashtag:999]] after", links=False)

        self.assertEqual(result, "Before  after")
        self.assertEqual(logs.records[0].hashtag_ids, [999])

    def test_text_without_references_is_unchanged(self):
        self.assertEqual(render_hashtags("No tags here"), "No tags here")
        self.assertEqual(render_hashtags(""), "")
        self.assertEqual(render_hashtags(None), "")

    @override_settings(HASHTAG_SEARCH_URL="https://example.org/search")
    def test_search_url_is_configurable(self):
        self.assertEqual(hashtag_search_url("día"), "https://example.org/search?term=%23d%C3%ADa")

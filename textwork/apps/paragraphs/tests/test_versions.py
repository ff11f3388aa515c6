"""Tests for building version entries from paragraph history."""

from django.test import TestCase, tag

from textwork.apps.core.test_utils import TestDataMixin, make_entry
from textwork.apps.paragraphs.actions import answer_paragraph, publish_answer
from textwork.apps.paragraphs.versions import VersionEvent, version_entries


@tag("models")
class VersionEntriesTests(TestDataMixin, TestCase):
    """version_entries() reads django-simple-history records oldest first."""

    def test_creation_lists_non_empty_fields(self):
        """The first entry is a creation with every filled-in field."""
        (entry,) = version_entries(self.paragraph)

        self.assertIs(entry.event, VersionEvent.CREATE)
        self.assertEqual(entry.number, 1)
        self.assertEqual(entry.changeset["title"], (None, {"en": "Participatory budget"}))
        self.assertEqual(entry.changeset["component"], (None, self.component.pk))
        self.assertNotIn("state", entry.changeset)
        self.assertNotIn("state_published_at", entry.changeset)
        self.assertNotIn("id", entry.changeset)
        self.assertNotIn("updated_at", entry.changeset)

    def test_updates_carry_only_changed_fields(self):
        """Each update lists the fields that differ from the previous save."""
        answer_paragraph(self.paragraph, "rejected", user=self.user)
        publish_answer(self.paragraph, user=self.user)

        entries = version_entries(self.paragraph)

        self.assertEqual(
            [e.event for e in entries],
            [VersionEvent.CREATE, VersionEvent.UPDATE, VersionEvent.UPDATE],
        )
        self.assertEqual([e.number for e in entries], [1, 2, 3])
        self.assertEqual(entries[1].changeset, {"state": ("", "rejected")})
        self.assertEqual(set(entries[2].changeset), {"state_published_at"})
        self.assertIsNone(entries[2].state_published_at_change[0])
        self.assertIsNotNone(entries[2].state_published_at_change[1])

    def test_entries_record_acting_user(self):
        answer_paragraph(self.paragraph, "accepted", user=self.user)

        entries = version_entries(self.paragraph)

        self.assertIsNone(entries[0].user)
        self.assertEqual(entries[1].user, self.user)
        self.assertIsNotNone(entries[1].created_at)

    def test_deletion_lists_last_values(self):
        """A deletion entry records the values the paragraph had."""
        paragraph_id = self.paragraph.pk
        self.paragraph.delete()
        self.paragraph.pk = paragraph_id

        entries = version_entries(self.paragraph)

        self.assertIs(entries[-1].event, VersionEvent.DESTROY)
        self.assertEqual(entries[-1].changeset["title"], ({"en": "Participatory budget"}, None))


@tag("unit")
class VersionEntryTests(TestCase):
    """Copy-on-write helpers of VersionEntry."""

    def test_with_change_returns_copy(self):
        entry = make_entry(title=("a", "b"))

        updated = entry.with_change("state", (None, "accepted"))

        self.assertEqual(updated.changeset, {"title": ("a", "b"), "state": (None, "accepted")})
        self.assertEqual(entry.changeset, {"title": ("a", "b")})

    def test_without_change_returns_copy(self):
        entry = make_entry(title=("a", "b"), state=(None, "accepted"))

        updated = entry.without_change("state")

        self.assertEqual(updated.changeset, {"title": ("a", "b")})
        self.assertIsNone(updated.state_change)
        self.assertEqual(entry.state_change, (None, "accepted"))

    def test_change_accessors_accept_lists(self):
        """Changesets loaded from JSON use lists for (old, new) pairs."""
        entry = make_entry(state_published_at=[None, "2024-01-01"])
        self.assertEqual(entry.state_published_at_change, (None, "2024-01-01"))

"""Tests for the version visibility filter."""

from django.test import SimpleTestCase, tag

from textwork.apps.core.test_utils import make_entry
from textwork.apps.paragraphs.versions import VersionEvent
from textwork.apps.paragraphs.visibility import VersionVisibilityFilter, Visibility, step


def never_empty(entry):
    return False


def _numbers(entries):
    return [entry.number for entry in entries]


def _scenario_a():
    return [
        make_entry("create", number=1, title=(None, "X")),
        make_entry("update", number=2, state=(None, "rejected")),
        make_entry("update", number=3, state_published_at=(None, "2024-01-01")),
    ]


@tag("unit")
class PendingStateTests(SimpleTestCase):
    """State changes are held back until the answer is published."""

    def setUp(self):
        self.filter = VersionVisibilityFilter(diff_is_empty=never_empty)

    def test_state_moves_to_publishing_entry(self):
        """An answer given before publication shows up on the publishing entry."""
        first, second, third = self.filter(_scenario_a())

        self.assertEqual(first.changeset, {"title": (None, "X")})
        self.assertEqual(second.number, 2)
        self.assertEqual(second.changeset, {})
        self.assertEqual(
            third.changeset,
            {"state_published_at": (None, "2024-01-01"), "state": (None, "rejected")},
        )

    def test_unpublished_state_is_never_surfaced(self):
        """Without a publication the held-back answer never appears."""
        entries = _scenario_a()[:2]

        result = self.filter(entries)

        self.assertEqual(_numbers(result), [1, 2])
        self.assertNotIn("state", result[1].changeset)

    def test_final_accumulator_keeps_pending_state(self):
        """fold() reports the answer still waiting for publication."""
        _, final = self.filter.fold(_scenario_a()[:2])
        self.assertEqual(final, Visibility(visible=False, pending_state=(None, "rejected")))

    def test_consecutive_states_collapse_to_last(self):
        """Only the last of several unpublished answers is shown."""
        entries = [
            make_entry("create", number=1, title=(None, "X")),
            make_entry("update", number=2, state=(None, "evaluating")),
            make_entry("update", number=3, state=("evaluating", "rejected")),
            make_entry("update", number=4, state_published_at=(None, "2024-01-01")),
        ]

        result = self.filter(entries)

        self.assertEqual(result[3].changeset["state"], ("evaluating", "rejected"))
        self.assertNotIn("state", result[1].changeset)
        self.assertNotIn("state", result[2].changeset)

    def test_state_published_together_stays_in_place(self):
        """An answer published in the same save is shown on that save."""
        entries = [
            make_entry(
                "update",
                number=1,
                state=(None, "accepted"),
                state_published_at=(None, "2024-01-01"),
            ),
        ]

        (entry,) = self.filter(entries)

        self.assertEqual(entry.changeset["state"], (None, "accepted"))

    def test_changes_after_publication_are_visible(self):
        """Once published, later answers are shown immediately."""
        entries = [
            make_entry("update", number=1, state_published_at=(None, "2024-01-01")),
            make_entry("update", number=2, state=("accepted", "rejected")),
        ]

        result = self.filter(entries)

        self.assertEqual(result[1].changeset, {"state": ("accepted", "rejected")})

    def test_unpublishing_hides_later_answers(self):
        """Clearing the publication date hides answers given afterwards."""
        entries = [
            make_entry(
                "update", number=1, state=(None, "accepted"), state_published_at=(None, "t1")
            ),
            make_entry("update", number=2, state_published_at=("t1", None)),
            make_entry("update", number=3, state=("accepted", "rejected")),
        ]

        result = self.filter(entries)

        self.assertEqual(result[0].changeset["state"], (None, "accepted"))
        self.assertEqual(result[2].changeset, {})

    def test_empty_publication_value_does_not_publish(self):
        """A blank publication value counts as not published."""
        entries = [
            make_entry("update", number=1, state=(None, "rejected")),
            make_entry("update", number=2, state_published_at=(None, "  ")),
        ]

        result = self.filter(entries)

        self.assertNotIn("state", result[1].changeset)

    def test_input_entries_are_not_mutated(self):
        """The filter copies entries instead of editing them."""
        entries = _scenario_a()

        self.filter(entries)

        self.assertEqual(entries[1].changeset, {"state": (None, "rejected")})
        self.assertEqual(entries[2].changeset, {"state_published_at": (None, "2024-01-01")})

    def test_malformed_changes_pass_through(self):
        """Values that are not (old, new) pairs count as no change."""
        entries = [
            make_entry("update", number=1, state="rejected", state_published_at="soon"),
        ]

        (entry,) = self.filter(entries)

        self.assertEqual(entry.changeset, {"state": "rejected", "state_published_at": "soon"})


@tag("unit")
class EmptyDiffExclusionTests(SimpleTestCase):
    """Updates that change nothing visible are dropped."""

    def test_update_with_empty_diff_is_dropped(self):
        """An update reported empty by the diff collaborator is excluded."""
        empty_numbers = {2}
        version_filter = VersionVisibilityFilter(
            diff_is_empty=lambda entry: entry.number in empty_numbers
        )
        entries = [
            make_entry("create", number=1, title=(None, "X")),
            make_entry("update", number=2, position=(1, 2)),
            make_entry("update", number=3, title=("X", "Y")),
        ]

        self.assertEqual(_numbers(version_filter(entries)), [1, 3])

    def test_create_and_destroy_are_never_dropped(self):
        """Only updates are excluded for an empty diff."""
        version_filter = VersionVisibilityFilter(diff_is_empty=lambda entry: True)
        entries = [
            make_entry("create", number=1),
            make_entry("update", number=2),
            make_entry("destroy", number=3),
        ]

        self.assertEqual(_numbers(version_filter(entries)), [1, 3])

    def test_diff_is_checked_after_reshaping(self):
        """A publication-only update is kept once the held-back state lands on it."""
        result = VersionVisibilityFilter()(_scenario_a())

        # The state-only update is empty once its state is withheld
        self.assertEqual(_numbers(result), [1, 3])
        self.assertEqual(result[1].changeset["state"], (None, "rejected"))

    def test_default_diff_drops_bookkeeping_updates(self):
        """With the real diff renderer, position-only updates disappear."""
        entries = [
            make_entry("create", number=1, title=(None, {"en": "X"})),
            make_entry("update", number=2, position=(0, 1)),
        ]

        self.assertEqual(_numbers(VersionVisibilityFilter()(entries)), [1])


@tag("unit")
class FilterPropertyTests(SimpleTestCase):
    """Order preservation and idempotence over a handful of histories."""

    histories = [
        [],
        _scenario_a(),
        _scenario_a()[:2],
        [
            make_entry("create", number=1, title=(None, {"en": "A"})),
            make_entry("update", number=2, state=(None, "evaluating")),
            make_entry("update", number=3, body=({"en": "a"}, {"en": "b"})),
            make_entry("update", number=4, state=("evaluating", "accepted")),
            make_entry("update", number=5, state_published_at=(None, "t1")),
            make_entry("update", number=6, state_published_at=("t1", None)),
            make_entry("update", number=7, state=("accepted", "rejected")),
            make_entry("update", number=8, position=(4, 5)),
            make_entry("destroy", number=9, title=({"en": "A"}, None)),
        ],
    ]

    def test_output_is_ordered_subsequence(self):
        for history in self.histories:
            for version_filter in (VersionVisibilityFilter(), VersionVisibilityFilter(never_empty)):
                with self.subTest(history=_numbers(history)):
                    kept = _numbers(version_filter(history))
                    self.assertEqual(kept, sorted(kept))
                    self.assertTrue(set(kept) <= set(_numbers(history)))

    def test_no_state_before_publication(self):
        """Every kept state change sits at or after a publishing entry."""
        for history in self.histories:
            published = False
            kept = {e.number: e for e in VersionVisibilityFilter(never_empty)(history)}
            for entry in history:
                change = entry.state_published_at_change
                if change is not None:
                    published = bool(change[1])
                if entry.number in kept and "state" in kept[entry.number].changeset:
                    self.assertTrue(published, f"state shown on version {entry.number}")

    def test_filtering_is_idempotent(self):
        for history in self.histories:
            for version_filter in (VersionVisibilityFilter(), VersionVisibilityFilter(never_empty)):
                with self.subTest(history=_numbers(history)):
                    once = version_filter(history)
                    self.assertEqual(version_filter(once), once)

    def test_refiltering_loses_dropped_publication(self):
        """A dropped publication-only update no longer unlocks later answers on a second pass."""
        history = [
            make_entry("create", number=1, title=(None, {"en": "A"})),
            make_entry("update", number=2, state_published_at=(None, "t1")),
            make_entry("update", number=3, state=("accepted", "rejected")),
        ]
        version_filter = VersionVisibilityFilter()

        once = version_filter(history)

        self.assertEqual(_numbers(once), [1, 3])
        self.assertEqual(once[1].changeset, {"state": ("accepted", "rejected")})
        self.assertEqual(_numbers(version_filter(once)), [1])


@tag("unit")
class StepTests(SimpleTestCase):
    def test_step_holds_state_while_hidden(self):
        acc, entry = step(Visibility(), make_entry(state=(None, "rejected")))
        self.assertEqual(acc.pending_state, (None, "rejected"))
        self.assertEqual(entry.changeset, {})
        self.assertIs(entry.event, VersionEvent.UPDATE)

    def test_step_clears_pending_state_once_visible(self):
        acc, entry = step(
            Visibility(pending_state=(None, "accepted")),
            make_entry(state_published_at=(None, "t1")),
        )
        self.assertEqual(acc, Visibility(visible=True))
        self.assertEqual(entry.state_change, (None, "accepted"))

import json
import unittest
from datetime import datetime, timezone
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from event_brief.catalog import GENRES
from event_brief.models import AllowList, SubscriberProfile
from event_brief.services.time_window import resolve_time_window
from event_brief.services.validation import validate_events


def _candidate(**overrides):
    event = {
        "event_name": "Jazz Night",
        "artists": ["Trio Ha'Ir"],
        "genres": ["Jazz"],
        "date": "2026-10-21T20:00:00Z",
        "venue": "Barby",
        "event_url": "https://barby.co.il/events/jazz-night",
    }
    event.update(overrides)
    return event


class TestValidateEvents(unittest.TestCase):

    def setUp(self):
        # Next 7 days from 2026-10-18T12:00Z -> 2026-10-25T12:00Z
        self.window = resolve_time_window(
            "Next 7 days", datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)
        )
        self.allow = AllowList(
            urls=frozenset({"https://barby.co.il/events", "https://tickets.example.com/e/1"}),
            hosts=frozenset({"barby.co.il"}),
        )
        self.profile = SubscriberProfile()

    def _validate(self, candidates, profile=None):
        raw = candidates if isinstance(candidates, str) else json.dumps(candidates)
        return validate_events(raw, profile or self.profile, self.allow, self.window)

    # -- parsing -----------------------------------------------------------

    def test_not_json_yields_empty_list(self):
        self.assertEqual(self._validate("not json"), [])

    def test_empty_array_yields_empty_list(self):
        self.assertEqual(self._validate("[]"), [])

    def test_json_object_is_not_an_array(self):
        self.assertEqual(self._validate(json.dumps(_candidate())), [])

    def test_none_output_yields_empty_list(self):
        self.assertEqual(validate_events(None, self.profile, self.allow, self.window), [])

    def test_fenced_array_is_parsed(self):
        raw = "```json\n" + json.dumps([_candidate()]) + "\n```"
        events = self._validate(raw)
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].event_url, "https://barby.co.il/events/jazz-night")

    def test_fence_without_language_tag(self):
        raw = "  ```\n" + json.dumps([_candidate()]) + "```  "
        self.assertEqual(len(self._validate(raw)), 1)

    def test_non_object_elements_are_skipped(self):
        events = self._validate([1, "text", None, ["list"], _candidate()])
        self.assertEqual(len(events), 1)

    # -- field coercion ----------------------------------------------------

    def test_fields_are_trimmed_and_lists_cleaned(self):
        events = self._validate([
            _candidate(
                event_name="  Jazz Night ",
                venue=" Barby ",
                artists=[" A ", "", 3, None, "B"],
                genres="Jazz",
            )
        ])
        event = events[0]
        self.assertEqual(event.event_name, "Jazz Night")
        self.assertEqual(event.venue, "Barby")
        self.assertEqual(event.artists, ("A", "B"))
        self.assertEqual(event.genres, ())

    def test_missing_or_blank_required_fields_are_rejected(self):
        for field in ("event_name", "date", "venue", "event_url"):
            with self.subTest(field=field):
                self.assertEqual(self._validate([_candidate(**{field: "   "})]), [])
                candidate = _candidate()
                del candidate[field]
                self.assertEqual(self._validate([candidate]), [])

    def test_non_string_required_field_is_rejected(self):
        self.assertEqual(self._validate([_candidate(event_name=42)]), [])

    # -- date window -------------------------------------------------------

    def test_unparsable_date_is_rejected(self):
        self.assertEqual(self._validate([_candidate(date="next Tuesday")]), [])

    def test_out_of_range_offset_dates_do_not_abort_the_batch(self):
        events = self._validate([
            _candidate(date="0001-01-01T00:00:00+05:00", event_url="https://barby.co.il/events/a"),
            _candidate(date="9999-12-31T23:00:00-05:00", event_url="https://barby.co.il/events/b"),
            _candidate(),
        ])
        self.assertEqual([e.event_url for e in events], ["https://barby.co.il/events/jazz-night"])

    def test_dates_outside_window_are_rejected(self):
        self.assertEqual(self._validate([_candidate(date="2026-10-18T11:59:59Z")]), [])
        self.assertEqual(self._validate([_candidate(date="2026-10-26")]), [])

    def test_window_bounds_are_inclusive(self):
        self.assertEqual(len(self._validate([_candidate(date="2026-10-25T12:00:00+00:00")])), 1)
        self.assertEqual(len(self._validate([_candidate(date="2026-10-18T12:00:00Z")])), 1)

    def test_date_only_and_offset_dates(self):
        self.assertEqual(len(self._validate([_candidate(date="2026-10-22")])), 1)
        # 2026-10-25T14:30+03:00 is 11:30Z, inside the window
        self.assertEqual(len(self._validate([_candidate(date="2026-10-25T14:30:00+03:00")])), 1)

    # -- grounding ---------------------------------------------------------

    def test_relative_url_is_rejected(self):
        self.assertEqual(self._validate([_candidate(event_url="/events/jazz-night")]), [])

    def test_ungrounded_url_is_rejected(self):
        self.assertEqual(
            self._validate([_candidate(event_url="https://made-up.example/jazz-night")]), []
        )

    def test_exact_url_is_grounded_even_without_host(self):
        events = self._validate([_candidate(event_url="https://tickets.example.com/e/1")])
        self.assertEqual(len(events), 1)

    def test_other_path_on_grounded_host_is_accepted(self):
        events = self._validate([_candidate(event_url="https://barby.co.il/show/77")])
        self.assertEqual(len(events), 1)

    def test_ungrounded_url_rejected_even_when_perfect_match(self):
        profile = SubscriberProfile(genres=("Jazz",), artists=("Trio Ha'Ir",), venues=("barby",))
        events = self._validate(
            [_candidate(event_url="https://barby.co.il.evil.example/jazz")], profile
        )
        self.assertEqual(events, [])

    # -- genres ------------------------------------------------------------

    def test_genre_filter_is_case_insensitive(self):
        profile = SubscriberProfile(genres=("Jazz",))
        self.assertEqual(len(self._validate([_candidate(genres=["jazz"])], profile)), 1)

    def test_genre_filter_rejects_non_matching(self):
        profile = SubscriberProfile(genres=("Jazz",))
        self.assertEqual(self._validate([_candidate(genres=["Metal"])], profile), [])
        self.assertEqual(self._validate([_candidate(genres=[])], profile), [])

    def test_all_genres_selection_disables_filter(self):
        profile = SubscriberProfile(genres=tuple(reversed(GENRES)) + ("Pop",))
        events = self._validate([_candidate(genres=[])], profile)
        self.assertEqual(len(events), 1)

    def test_no_genres_selected_disables_filter(self):
        self.assertEqual(len(self._validate([_candidate(genres=["Opera"])])), 1)

    # -- dedup and cap -----------------------------------------------------

    def test_duplicate_urls_keep_first(self):
        events = self._validate([
            _candidate(event_name="First"),
            _candidate(event_name="Second", date="2026-10-22"),
        ])
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0].event_name, "First")

    def test_cap_preserves_order(self):
        candidates = [
            _candidate(event_name=f"Event {i}", event_url=f"https://barby.co.il/events/{i}")
            for i in range(25)
        ]
        events = self._validate(candidates)
        self.assertEqual(len(events), 10)
        self.assertEqual([e.event_name for e in events], [f"Event {i}" for i in range(10)])

    def test_to_dict_shape(self):
        event = self._validate([_candidate()])[0]
        self.assertEqual(event.to_dict(), _candidate())


if __name__ == '__main__':
    unittest.main()

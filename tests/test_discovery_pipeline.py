import json
import unittest
from unittest.mock import patch
from datetime import datetime, timedelta, timezone
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from event_brief.errors import (
    ExtractionConfigError,
    InvalidProfileError,
    QuotaExhaustedError,
    RateLimitedError,
)
from event_brief.models import ModelOutput, Schedule, SourceDocument, SubscriberProfile
from event_brief.services.digest import compose_digest
from event_brief.workflows.discovery_pipeline import discover_events

NOW = datetime(2026, 10, 18, 12, 0, tzinfo=timezone.utc)


@patch('event_brief.workflows.discovery_pipeline.ensure_configured')
class TestDiscoverEvents(unittest.TestCase):

    def setUp(self):
        self.profile = SubscriberProfile(
            id="brief-1",
            name="Jazz at Barby",
            genres=("Jazz",),
            venues=("barby",),
            schedule=Schedule(day_of_week="Sunday", time="10:00", event_window="Next 7 days"),
            delivery_method="email",
        )
        self.event_date = (NOW + timedelta(days=3)).date().isoformat()
        self.document = SourceDocument(
            url="https://barby.co.il/events",
            text=(
                f"Jazz Night - {self.event_date} 21:00. "
                "Tickets: https://barby.co.il/events/jazz-night"
            ),
        )
        self.model_events = [
            {
                "event_name": "Jazz Night",
                "artists": [],
                "genres": ["Jazz"],
                "date": self.event_date,
                "venue": "Barby",
                "event_url": "https://barby.co.il/events/jazz-night",
            }
        ]

    @patch('event_brief.workflows.discovery_pipeline.extract_events_text')
    @patch('event_brief.workflows.discovery_pipeline.gather_sources')
    def test_end_to_end_barby_jazz_night(self, mock_gather, mock_extract, mock_configured):
        mock_gather.return_value = [self.document]
        mock_extract.return_value = ModelOutput(text=json.dumps(self.model_events), finish_reason="stop")

        result = discover_events(self.profile, trace_id="trace_e2e", now=NOW)

        self.assertEqual(len(result.events), 1)
        self.assertEqual(result.events[0].event_url, "https://barby.co.il/events/jazz-night")
        self.assertEqual(result.source_count, 1)
        self.assertEqual(result.finish_reason, "stop")
        self.assertIsNone(result.failure)

        prompt = mock_extract.call_args.args[0]
        self.assertIn("preferred_genres: Jazz", prompt)
        self.assertIn("url: https://barby.co.il/events", prompt)
        self.assertEqual(mock_extract.call_args.kwargs["trace_id"], "trace_e2e")
        mock_gather.assert_called_once()
        self.assertEqual(mock_gather.call_args.kwargs["trace_id"], "trace_e2e")

        digest = compose_digest("email", self.profile.name, list(result.events))
        self.assertEqual(digest.body.count("View Details"), 1)
        self.assertIn("🎸 Jazz", digest.body)

    @patch('event_brief.workflows.discovery_pipeline.extract_events_text')
    @patch('event_brief.workflows.discovery_pipeline.gather_sources')
    def test_zero_sources_skips_extraction(self, mock_gather, mock_extract, mock_configured):
        mock_gather.return_value = []

        result = discover_events(self.profile, trace_id="trace_0", now=NOW)

        self.assertEqual(result.events, ())
        self.assertEqual(result.source_count, 0)
        self.assertEqual(result.to_dict()["diagnostics"], {"sourceCount": 0})
        mock_extract.assert_not_called()

    @patch('event_brief.workflows.discovery_pipeline.extract_events_text')
    @patch('event_brief.workflows.discovery_pipeline.gather_sources')
    def test_fabricated_urls_are_dropped(self, mock_gather, mock_extract, mock_configured):
        mock_gather.return_value = [self.document]
        fabricated = dict(self.model_events[0], event_url="https://invented.example/jazz")
        mock_extract.return_value = ModelOutput(text=json.dumps([fabricated]))

        result = discover_events(self.profile, now=NOW)

        self.assertEqual(result.events, ())
        self.assertEqual(result.source_count, 1)

    @patch('event_brief.workflows.discovery_pipeline.extract_events_text')
    @patch('event_brief.workflows.discovery_pipeline.gather_sources')
    def test_malformed_model_output(self, mock_gather, mock_extract, mock_configured):
        mock_gather.return_value = [self.document]
        mock_extract.return_value = ModelOutput(text="Sorry, I could not find anything.")

        result = discover_events(self.profile, now=NOW)

        self.assertEqual(result.events, ())
        self.assertIsNone(result.failure)

    @patch('event_brief.workflows.discovery_pipeline.extract_events_text')
    @patch('event_brief.workflows.discovery_pipeline.gather_sources')
    def test_rate_limit_degrades_to_retryable_empty_result(self, mock_gather, mock_extract, mock_configured):
        mock_gather.return_value = [self.document]
        mock_extract.side_effect = RateLimitedError("slow down")

        result = discover_events(self.profile, trace_id="trace_rl", now=NOW)

        self.assertEqual(result.events, ())
        self.assertEqual(result.failure, "rate_limited")
        self.assertTrue(result.retryable)
        self.assertEqual(result.to_dict()["diagnostics"]["failure"], "rate_limited")

    @patch('event_brief.workflows.discovery_pipeline.extract_events_text')
    @patch('event_brief.workflows.discovery_pipeline.gather_sources')
    def test_quota_exhaustion_is_hard_stop(self, mock_gather, mock_extract, mock_configured):
        mock_gather.return_value = [self.document]
        mock_extract.side_effect = QuotaExhaustedError("no credits")

        result = discover_events(self.profile, now=NOW)

        self.assertEqual(result.failure, "quota_exhausted")
        self.assertFalse(result.retryable)

    @patch('event_brief.workflows.discovery_pipeline.gather_sources')
    def test_unconfigured_model_fails_before_gathering(self, mock_gather, mock_configured):
        mock_configured.side_effect = ExtractionConfigError("AI service not configured", trace_id="trace_cfg")

        with self.assertRaises(ExtractionConfigError) as ctx:
            discover_events(self.profile, trace_id="trace_cfg", now=NOW)

        self.assertEqual(ctx.exception.trace_id, "trace_cfg")
        mock_gather.assert_not_called()

    def test_invalid_profile_carries_trace_id(self, mock_configured):
        with self.assertRaises(InvalidProfileError) as ctx:
            discover_events({"genres": ["Jazz"]}, trace_id="trace_bad", now=NOW)

        self.assertEqual(ctx.exception.trace_id, "trace_bad")

    @patch('event_brief.workflows.discovery_pipeline.extract_events_text')
    @patch('event_brief.workflows.discovery_pipeline.gather_sources')
    def test_result_envelope(self, mock_gather, mock_extract, mock_configured):
        mock_gather.return_value = [self.document]
        mock_extract.return_value = ModelOutput(text=json.dumps(self.model_events), finish_reason="stop")

        data = discover_events(self.profile, trace_id="trace_env", now=NOW).to_dict()

        self.assertEqual(data["traceId"], "trace_env")
        self.assertEqual(data["briefParams"]["eventWindow"], "Next 7 days")
        self.assertEqual(data["diagnostics"], {"sourceCount": 1, "aiFinishReason": "stop"})
        self.assertEqual(data["events"][0]["event_name"], "Jazz Night")


if __name__ == '__main__':
    unittest.main()

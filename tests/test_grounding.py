import unittest
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from event_brief.models import SourceDocument
from event_brief.services.grounding import build_allow_list


class TestGrounding(unittest.TestCase):

    def test_seeds_with_document_url_and_host(self):
        allow = build_allow_list([SourceDocument(url="https://barby.co.il/events", text="no links")])

        self.assertIn("https://barby.co.il/events", allow.urls)
        self.assertEqual(allow.hosts, frozenset({"barby.co.il"}))

    def test_collects_urls_mentioned_in_text(self):
        text = (
            "Tickets: (https://tickets.example.com/show/1) and "
            "[more](https://barby.co.il/events/jazz-night) or \"http://Other.Example:8080/x\""
        )
        allow = build_allow_list([SourceDocument(url="https://barby.co.il/events", text=text)])

        self.assertIn("https://tickets.example.com/show/1", allow.urls)
        self.assertIn("https://barby.co.il/events/jazz-night", allow.urls)
        self.assertIn("tickets.example.com", allow.hosts)
        self.assertIn("other.example:8080", allow.hosts)

    def test_malformed_urls_are_skipped(self):
        allow = build_allow_list([
            SourceDocument(url="https://barby.co.il/events", text="broken http://[oops link"),
        ])

        self.assertEqual(allow.hosts, frozenset({"barby.co.il"}))

    def test_permits_exact_url_or_host(self):
        allow = build_allow_list([SourceDocument(url="https://barby.co.il/events", text="")])

        self.assertTrue(allow.permits("https://barby.co.il/other", "barby.co.il"))
        self.assertTrue(allow.permits("https://barby.co.il/events", None))
        self.assertFalse(allow.permits("https://fake.example/x", "fake.example"))

    def test_empty_documents(self):
        allow = build_allow_list([])
        self.assertEqual(allow.urls, frozenset())
        self.assertEqual(allow.hosts, frozenset())


if __name__ == '__main__':
    unittest.main()

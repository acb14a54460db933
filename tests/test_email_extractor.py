"""Tests for the email extractor."""

import re
import unittest

from email_scraper.email_extractor import EmailExtractor, extract_email, regex_matcher
from email_scraper.errors import NoEmailFoundError


class TestEmailExtractor(unittest.TestCase):

    def test_first_match_in_document_order(self):
        """The first address in the text wins; nothing is ranked."""
        html = """
        <p>Write to jane.doe@acme.example for press.</p>
        <a href="mailto:info@acme.example">info@acme.example</a>
        """
        self.assertEqual(extract_email(html), "jane.doe@acme.example")

    def test_contact_line(self):
        self.assertEqual(extract_email("Contact: sales@acme.example"), "sales@acme.example")

    def test_local_part_characters(self):
        self.assertEqual(extract_email("x first.last+tag_1%2-b@mail.acme-co.co.uk y"),
                         "first.last+tag_1%2-b@mail.acme-co.co.uk")

    def test_top_level_label_needs_two_letters(self):
        with self.assertRaises(NoEmailFoundError):
            extract_email("user@host.c and user@host")

    def test_no_at_sign(self):
        """A page without any @ has no email."""
        with self.assertRaises(NoEmailFoundError):
            extract_email("<html><body>Call us on 555-0100</body></html>")

    def test_empty_text(self):
        with self.assertRaises(NoEmailFoundError):
            extract_email("")

    def test_idempotent(self):
        text = "a@b.example then c@d.example"
        self.assertEqual(extract_email(text), extract_email(text))

    def test_find_all_keeps_duplicates(self):
        extractor = EmailExtractor()
        text = "info@acme.example, info@acme.example; sales@acme.example"
        self.assertEqual(extractor.find_all(text),
                         ["info@acme.example", "info@acme.example", "sales@acme.example"])

    def test_error_names_source(self):
        with self.assertRaises(NoEmailFoundError) as ctx:
            EmailExtractor().extract_email("nothing here", source="Ghost Inc")
        self.assertIn("Ghost Inc", str(ctx.exception))

    def test_pluggable_matcher(self):
        """A different matcher can replace the regex."""
        strict = regex_matcher(re.compile(r"[a-z]+@acme\.example"))
        extractor = EmailExtractor(matcher=strict)
        self.assertEqual(extractor.extract_email("bob@other.example, ann@acme.example"),
                         "ann@acme.example")

        extractor = EmailExtractor(matcher=lambda text: [])
        with self.assertRaises(NoEmailFoundError):
            extractor.extract_email("ann@acme.example")


if __name__ == '__main__':
    unittest.main()

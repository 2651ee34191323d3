"""
Tests for tag matching.
"""

from inspomatch.core.scoring import matching_tags, normalize_tag


class TestMatchingTags:
    """Case-insensitive set membership filter."""

    def test_case_insensitive_match_keeps_query_casing(self):
        """Query casing is preserved in the output."""
        assert matching_tags(["updo", "bridal"], ["Bridal", "glam"]) == ["bridal"]
        assert matching_tags(["Bridal"], ["bridal"]) == ["Bridal"]

    def test_empty_query(self):
        """No query tags means no matches."""
        assert matching_tags([], ["bridal", "glam"]) == []

    def test_empty_candidate(self):
        """No candidate tags means no matches."""
        assert matching_tags(["bridal", "glam"], []) == []

    def test_whitespace_trimmed(self):
        """Surrounding whitespace is ignored on both sides."""
        assert matching_tags(["  Curly "], ["curly  "]) == ["  Curly "]

    def test_query_order_preserved(self):
        """Output follows the query order, not the candidate order."""
        assert matching_tags(["a", "b", "c"], ["c", "a"]) == ["a", "c"]

    def test_duplicates_kept(self):
        """Duplicate query tags are all reported."""
        assert matching_tags(["fade", "fade"], ["FADE"]) == ["fade", "fade"]

    def test_no_fuzzy_matching(self):
        """Related words are not treated as matches."""
        assert matching_tags(["curls"], ["curly"]) == []

    def test_normalize_tag(self):
        assert normalize_tag("  Box-Braids ") == "box-braids"

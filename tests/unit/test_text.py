"""
Unit Tests for free-text cleaning
"""
from udaan.services.text import clean_text


class Unprintable:
    def __str__(self):
        raise ValueError("cannot render")


class TestCleanText:
    """Test clean_text"""

    def test_trims_whitespace(self):
        assert clean_text("  python and sql  ") == "python and sql"

    def test_none_is_empty(self):
        assert clean_text(None) == ""

    def test_empty_string_stays_empty(self):
        assert clean_text("") == ""

    def test_strips_control_characters(self):
        assert clean_text("data\x00 sci\x1fence\x7f") == "data science"

    def test_newlines_are_control_characters(self):
        assert clean_text("design\nux") == "designux"

    def test_removes_surrounding_quotes(self):
        assert clean_text('"software"') == "software"
        assert clean_text("'design'") == "design"
        assert clean_text("`marketing`") == "marketing"

    def test_keeps_inner_quotes(self):
        assert clean_text("I'm hopeful") == "I'm hopeful"

    def test_quotes_with_surrounding_spaces(self):
        assert clean_text('  " business "  ') == "business"

    def test_non_string_is_converted(self):
        assert clean_text(42) == "42"

    def test_conversion_failure_is_empty(self):
        assert clean_text(Unprintable()) == ""

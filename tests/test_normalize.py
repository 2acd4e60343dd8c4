"""
Tests for company name normalization.
"""
import pytest

from jobtrack.core.normalize import comparison_key, normalize_name


@pytest.mark.parametrize(
    "raw, display",
    [
        ("globex", "Globex"),
        ("GLOBEX", "Globex"),
        ("  acme   CORP ", "Acme Corp"),
        ("initech\tsoftware", "Initech Software"),
        ("o'reilly media", "O'reilly Media"),
    ],
)
def test_display_form(raw, display):
    assert normalize_name(raw).display == display


def test_case_and_whitespace_variants_share_a_key():
    assert comparison_key("Acme Corp") == comparison_key("  ACME    corp  ")
    assert comparison_key("Acme Corp") == "acme corp"


def test_different_names_have_different_keys():
    assert comparison_key("Acme") != comparison_key("Acme Corp")


def test_blank_input_yields_empty_name():
    assert normalize_name("   ") == ("", "")
    assert normalize_name("") == ("", "")


def test_normalization_is_idempotent():
    for raw in ["globex", "  acme   CORP ", "straße nord", "éclair bakery"]:
        once = normalize_name(raw)
        assert normalize_name(once.display) == once

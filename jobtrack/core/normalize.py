"""
Company name normalization.

Two names that differ only by case or whitespace must collide, while the
stored name still reads nicely ("  acme   CORP " is shown as "Acme Corp").
"""
from typing import NamedTuple


class NormalizedName(NamedTuple):
    display: str
    key: str


def _capitalize(word: str) -> str:
    # title() on the first character keeps this idempotent for characters
    # whose upper-case form is longer than one character (e.g. "ß")
    return word[:1].title() + word[1:]


def normalize_name(raw: str) -> NormalizedName:
    """
    Normalize a free-text name.

    Returns the display form (every word capitalized, single spaces) and the
    comparison key used for uniqueness lookups. Empty or whitespace-only
    input yields ``NormalizedName("", "")``; rejecting it is up to the caller.
    """
    words = raw.strip().lower().split()
    display = " ".join(_capitalize(word) for word in words)
    return NormalizedName(display=display, key=display.strip().lower())


def comparison_key(raw: str) -> str:
    return normalize_name(raw).key

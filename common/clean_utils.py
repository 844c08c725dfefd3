# -*- coding: utf-8 -*-
"""
Generic label-cleaning helpers shared by every agency adapter.

Each helper is a pure ``str -> str`` function and is idempotent: running it on
its own output changes nothing. Agencies chain them in a fixed order; the
order matters because later patterns assume earlier ones already ran (street
types are shortened after junction markers are in place, for example).
"""

import re
from typing import Dict, Pattern

EMPTY = ""
SPACE = " "

CLEAN_AT: Pattern[str] = re.compile(r"(?<!\S)(?:at|&)(?!\S)", re.IGNORECASE)
CLEAN_AT_REPLACEMENT = "@"

_VIA_TAIL = re.compile(r"\s+via\s+.*$", re.IGNORECASE | re.DOTALL)
_KEEP_TO = re.compile(r"^.*\sto\s+", re.IGNORECASE | re.DOTALL)

_TRAILING_POINT = re.compile(r"(?<=\w)\.(?=\s|$)")
_WHITESPACES = re.compile(r"\s+")
SEPARATORS = r"[\s\-.,;:/]"
_DANGLING_SEPARATORS = re.compile(r"^" + SEPARATORS + r"+|" + SEPARATORS + r"+$")
_LOWERCASE_WORD = re.compile(r"\b([a-z])([a-z']*)\b")


def clean_words(*words: str) -> Pattern[str]:
    """Compile a case-insensitive whole-word pattern matching any of ``words``."""
    return re.compile(r"(?<!\w)(?:" + "|".join(words) + r")(?!\w)", re.IGNORECASE)


def clean_words_replacement(replacement: str) -> str:
    """Replacement string for a pattern built by :func:`clean_words`."""
    return replacement.replace("\\", "\\\\")


_BOUNDS: Dict[Pattern[str], str] = {
    clean_words("northbound"): "NB",
    clean_words("southbound"): "SB",
    clean_words("eastbound"): "EB",
    clean_words("westbound"): "WB",
}

_STREET_TYPES: Dict[Pattern[str], str] = {
    clean_words("avenue"): "Ave",
    clean_words("boulevard"): "Blvd",
    clean_words("centres", "centers"): "Ctrs",
    clean_words("centre", "center"): "Ctr",
    clean_words("circle"): "Cir",
    clean_words("court"): "Ct",
    clean_words("crescent"): "Cres",
    clean_words("drive"): "Dr",
    clean_words("highway"): "Hwy",
    clean_words("lane"): "Ln",
    clean_words("parkway"): "Pkwy",
    clean_words("place"): "Pl",
    clean_words("road"): "Rd",
    clean_words("square"): "Sq",
    clean_words("station"): "Sta",
    clean_words("street"): "St",
    clean_words("terrace"): "Ter",
}

_ORDINALS: Dict[Pattern[str], str] = {
    clean_words(word): number
    for word, number in (
        ("first", "1st"),
        ("second", "2nd"),
        ("third", "3rd"),
        ("fourth", "4th"),
        ("fifth", "5th"),
        ("sixth", "6th"),
        ("seventh", "7th"),
        ("eighth", "8th"),
        ("ninth", "9th"),
        ("tenth", "10th"),
    )
}


def _replace_all(text: str, replacements: Dict[Pattern[str], str]) -> str:
    for pattern, replacement in replacements.items():
        text = pattern.sub(replacement, text)
    return text


def clean_at(text: str) -> str:
    """Turn ``at`` and ``&`` between words into the ``@`` junction marker."""
    return CLEAN_AT.sub(CLEAN_AT_REPLACEMENT, text)


def keep_to_and_remove_via(text: str) -> str:
    """Keep the destination of ``A to B via C`` style headsigns (``B``)."""
    text = _VIA_TAIL.sub(EMPTY, text)
    return _KEEP_TO.sub(EMPTY, text)


def clean_bounds(text: str) -> str:
    """Shorten compass bound words: northbound -> NB, ..."""
    return _replace_all(text, _BOUNDS)


def clean_street_types(text: str) -> str:
    """Shorten street-type words: Avenue -> Ave, Station -> Sta, ..."""
    return _replace_all(text, _STREET_TYPES)


def clean_numbers(text: str) -> str:
    """Write ordinal words as numbers: First -> 1st, ..."""
    return _replace_all(text, _ORDINALS)


def remove_points(text: str) -> str:
    """Drop periods ending a word (``St.`` -> ``St``)."""
    return _TRAILING_POINT.sub(EMPTY, text)


def clean_separators(text: str) -> str:
    """Trim whitespace and punctuation left dangling at either end."""
    return _DANGLING_SEPARATORS.sub(EMPTY, text.strip())


def clean_label(label: str) -> str:
    """
    Final normalization applied to every displayed label.

    Collapses whitespace, trims dangling separators and capitalizes words
    written entirely in lower case. Mixed and upper case words are kept as is
    (``NB``, ``McDonald``).
    """
    label = clean_separators(_WHITESPACES.sub(SPACE, label))
    return _LOWERCASE_WORD.sub(lambda m: m.group(1).upper() + m.group(2), label)

# -*- coding: utf-8 -*-
import pytest

from common import clean_utils


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Edinburgh at Laurelwood", "Edinburgh @ Laurelwood"),
        ("Gordon & Vaughan", "Gordon @ Vaughan"),
        ("AT Station", "@ Station"),
        ("Waterloo Ave", "Waterloo Ave"),
        ("Attwood Heights", "Attwood Heights"),
        ("Gordon at & Vaughan", "Gordon @ @ Vaughan"),
    ],
)
def test_clean_at(text, expected):
    assert clean_utils.clean_at(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Guelph Central Station to University Centre", "University Centre"),
        ("University Centre via Gordon", "University Centre"),
        ("Downtown to Stone Road Mall via Edinburgh", "Stone Road Mall"),
        ("Toronto Street", "Toronto Street"),
    ],
)
def test_keep_to_and_remove_via(text, expected):
    assert clean_utils.keep_to_and_remove_via(text) == expected


def test_clean_bounds():
    assert clean_utils.clean_bounds("Gordon at Lowes Northbound") == "Gordon at Lowes NB"
    assert clean_utils.clean_bounds("southbound eastbound westbound") == "SB EB WB"


def test_clean_street_types():
    assert (
        clean_utils.clean_street_types("Victoria Road South at Macalister Boulevard")
        == "Victoria Rd South at Macalister Blvd"
    )
    assert clean_utils.clean_street_types("University Centre") == "University Ctr"
    assert clean_utils.clean_street_types("Woodlawn Smart Centres") == "Woodlawn Smart Ctrs"
    assert clean_utils.clean_street_types("Guelph Central Station") == "Guelph Central Sta"
    assert clean_utils.clean_street_types("Roadhouse") == "Roadhouse"


def test_clean_numbers():
    assert clean_utils.clean_numbers("First Avenue and Tenth Line") == "1st Avenue and 10th Line"


def test_remove_points():
    assert clean_utils.remove_points("Gordon St. at Clair Rd.") == "Gordon St at Clair Rd"
    assert clean_utils.remove_points("3.5 km") == "3.5 km"


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Stone Road Mall Depart.", "Stone Road Mall Depart"),
        (" - Southgate, ", "Southgate"),
        ("Gordon St.", "Gordon St"),
        ("Watson @ Fleming", "Watson @ Fleming"),
    ],
)
def test_clean_separators(text, expected):
    assert clean_utils.clean_separators(text) == expected


@pytest.mark.parametrize(
    "label, expected",
    [
        ("  stone   road mall ", "Stone Road Mall"),
        ("- Southgate -", "Southgate"),
        ("Watson @ Fleming,", "Watson @ Fleming"),
        ("NB McDonald", "NB McDonald"),
        ("", ""),
    ],
)
def test_clean_label(label, expected):
    assert clean_utils.clean_label(label) == expected


def test_clean_words_pattern():
    pattern = clean_utils.clean_words("platform", "quai")
    replacement = clean_utils.clean_words_replacement("P")

    assert pattern.sub(replacement, "Station Platform 2") == "Station P 2"
    assert pattern.sub(replacement, "quai 4") == "P 4"
    assert pattern.sub(replacement, "Platforms") == "Platforms"


@pytest.mark.parametrize(
    "helper",
    [
        clean_utils.clean_at,
        clean_utils.keep_to_and_remove_via,
        clean_utils.clean_bounds,
        clean_utils.clean_street_types,
        clean_utils.clean_numbers,
        clean_utils.remove_points,
        clean_utils.clean_separators,
        clean_utils.clean_label,
    ],
)
def test_helpers_are_idempotent(helper):
    text = "first street at university centre. northbound to Stone Road via Gordon"
    once = helper(text)
    assert helper(once) == once

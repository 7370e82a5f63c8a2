"""Tests for search scoring, ranking and highlighting."""

from __future__ import annotations

import pytest
from markupsafe import escape

from taxabrowser.models import LocalNames, RegionalName
from taxabrowser.search import (
    SEARCH_RESULT_LIMIT,
    SearchEngine,
    highlight_text,
    prepare_query,
    score_species,
    search_fields,
)


def test_single_record_prefix_match_on_english_name(record_factory):
    record = record_factory(english="Arabian Oryx", arabic="وعل")
    hits = SearchEngine([record]).search("arabian")

    assert len(hits) == 1
    assert hits[0].score == 6
    assert hits[0].species is record.species
    assert hits[0].path == record.path


def test_official_name_outranks_description(record_factory):
    in_description = record_factory(english="Sand Gazelle", description=("Lives near the oryx", "نص"))
    in_name = record_factory(english="White Oryx")

    hits = SearchEngine([in_description, in_name]).search("oryx")

    assert [h.species.english for h in hits] == ["White Oryx", "Sand Gazelle"]
    assert [h.score for h in hits] == [4, 2]


def test_exact_match_scores_higher_than_substring(record_factory):
    exact = record_factory(english="Oryx").species
    contains = record_factory(english="Wild Oryx").species

    assert score_species("oryx", exact) == 4 + 5 + 2
    assert score_species("oryx", contains) == 4
    assert score_species("oryx", exact) > score_species("oryx", contains)


def test_local_and_regional_names_score_three(record_factory):
    species = record_factory(
        english="Sand Gazelle",
        local_names=LocalNames(
            arabic=["الريم"],
            english=["Rhim"],
            regional=[RegionalName("Dune Rhim", "Najd")],
        ),
    ).species

    # "Rhim": local English exact (3 + 5 + 2); regional contains (3)
    assert score_species("rhim", species) == 13
    assert score_species("الريم", species) == 3 + 5 + 2


def test_species_without_local_names_only_has_four_fields(record_factory):
    species = record_factory(local_names=None).species

    assert len(search_fields(species)) == 4
    assert score_species("najd", species) == 0


def test_empty_fields_are_skipped(record_factory):
    species = record_factory(description=("", ""), local_names=LocalNames(english=[""])).species
    assert score_species("placeholder", species) == 0


def test_zero_score_records_are_excluded(animal_records):
    assert SearchEngine(animal_records).search("zzz") == []


def test_results_are_limited_with_ties_in_dataset_order(record_factory):
    records = [record_factory(english=f"Gazelle {i}") for i in range(SEARCH_RESULT_LIMIT + 2)]

    hits = SearchEngine(records).search("gazelle")

    assert len(hits) == SEARCH_RESULT_LIMIT
    assert [h.species.english for h in hits] == [f"Gazelle {i}" for i in range(SEARCH_RESULT_LIMIT)]
    assert all(h.score == 6 for h in hits)


def test_higher_scores_come_first_regardless_of_order(record_factory):
    records = [
        record_factory(english="Mountain Gazelle"),
        record_factory(english="Gazelle"),
    ]
    hits = SearchEngine(records).search("gazelle")
    assert [h.species.english for h in hits] == ["Gazelle", "Mountain Gazelle"]


def test_search_is_deterministic(animal_records):
    engine = SearchEngine(animal_records)
    assert engine.search("a") == engine.search("a")


def test_search_is_case_insensitive_on_fields(record_factory):
    assert SearchEngine([record_factory(english="DEATHSTALKER")]).search("death")[0].score == 6


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("  OrYx ", "oryx"),
        ("ab", "ab"),
        ("a", None),
        ("   ", None),
        (None, None),
    ],
)
def test_prepare_query(raw, expected):
    assert prepare_query(raw) == expected


def test_highlight_wraps_every_occurrence_case_insensitively():
    result = highlight_text("Oryx and oryx", "oryx", before="[", after="]")
    assert result == "[Oryx] and [oryx]"


def test_highlight_default_markers():
    assert highlight_text("Arabian Oryx", "oryx") == 'Arabian <span class="highlight">Oryx</span>'


def test_highlight_treats_query_literally():
    assert highlight_text("a.b axb", "a.b", before="[", after="]") == "[a.b] axb"
    assert highlight_text("(x)", "(", before="[", after="]") == "[(]x)"


def test_highlight_escapes_text_segments():
    result = highlight_text("<b>oryx</b>", "oryx", before="<mark>", after="</mark>", escape=escape)
    assert result == "&lt;b&gt;<mark>oryx</mark>&lt;/b&gt;"


def test_highlight_agrees_with_scoring_when_lowercasing_changes_length(record_factory):
    # "İ" lower-cases to "i" plus a combining dot
    query = "i\u0307z"
    record = record_factory(english="İzmir Gazelle")

    assert score_species(query, record.species) > 0
    assert highlight_text("İzmir Gazelle", query, before="[", after="]") == "[İz]mir Gazelle"


def test_highlight_without_query_returns_text():
    assert highlight_text("Oryx", "") == "Oryx"

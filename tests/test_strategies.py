import pytest

from quiniela.models.enums import ExtractionStrategy
from quiniela.parsing.strategies import (
    BlobRegexExtractor,
    GenericRegexExtractor,
    LinePairExtractor,
    SegmentPairingExtractor,
    leading_capitalized_run,
)


@pytest.fixture
def line_extractor(noise_filter):
    return LinePairExtractor(noise_filter)


def test_split_on_canonical_separator(line_extractor):
    assert line_extractor.split_on_separator("Getafe - Osasuna") == ("Getafe", "Osasuna")


def test_split_on_bare_dash(line_extractor):
    assert line_extractor.split_on_separator("GETAFE-OSASUNA") == ("GETAFE", "OSASUNA")


@pytest.mark.parametrize(
    "line, expected",
    [
        ("CELTA RAYO", ("CELTA", "RAYO")),
        ("1 Girona Valencia", ("Girona", "Valencia")),
        ("REAL BETIS SEVILLA", ("REAL BETIS", "SEVILLA")),
        ("Getafe Real Sociedad", ("Getafe", "Real Sociedad")),
        ("Las Palmas Real Betis", ("Las Palmas", "Real Betis")),
        ("Getafe X 1", None),
        ("Getafe Osasuna Celta", None),
        ("Getafe", None),
    ],
)
def test_split_two_tokens(line_extractor, line, expected):
    assert line_extractor.split_two_tokens(line) == expected


def test_dashed_line_yields_no_two_token_candidate(line_extractor):
    candidates = list(line_extractor.candidates("Real Madrid - Barcelona", 3, 40))
    assert [c.strategy for c in candidates] == [ExtractionStrategy.LINE]
    assert candidates[0].source_line_index == 3
    assert candidates[0].offset == 40


def test_leading_capitalized_run_stops_at_stop_token():
    assert leading_capitalized_run("Getafe X 1", ["X"]) == ["Getafe"]
    assert leading_capitalized_run("getafe Osasuna") == []
    assert leading_capitalized_run("A B C D E") == ["A", "B", "C", "D"]


def test_blob_regex_stops_at_punctuation_and_digits():
    text = "Getafe - Osasuna, 2 Betis - Celta 1 X 2 3 Eibar - Elche"
    candidates = BlobRegexExtractor().extract(text)
    assert [(c.home_raw, c.away_raw) for c in candidates] == [
        ("Getafe", "Osasuna"),
        ("Betis", "Celta"),
        ("Eibar", "Elche"),
    ]
    assert candidates[1].offset == text.index("Betis")


def test_blob_regex_reports_source_line():
    candidates = BlobRegexExtractor().extract("QUINIELA 12\nGetafe - Osasuna")
    assert candidates[0].source_line_index == 1


def test_segment_pairing_needs_thirty_segments():
    names = [f"Club{i:02d}" for i in range(30)]
    assert SegmentPairingExtractor().extract(" - ".join(names[:28])) == []

    blob = " - ".join(names)
    candidates = SegmentPairingExtractor().extract(blob)
    assert len(candidates) == 15
    assert (candidates[0].home_raw, candidates[0].away_raw) == ("Club00", "Club01")
    assert candidates[14].offset == blob.index(names[28])


def test_generic_regex_pairs_before_pipe():
    candidates = GenericRegexExtractor().extract("1. Getafe - Osasuna | 2-1")
    assert [(c.home_raw, c.away_raw) for c in candidates] == [("Getafe", "Osasuna")]

import pytest

from quiniela.parsing.match_extractor import MatchListExtractor
from quiniela.parsing.noise_filter import NoiseFilter
from quiniela.parsing.noise_tables import NoiseTables

FOURTEEN_MATCHES = [
    ("Real Madrid", "Barcelona"),
    ("Atletico", "Sevilla"),
    ("Valencia", "Villarreal"),
    ("Betis", "Celta"),
    ("Osasuna", "Alaves"),
    ("Girona", "Espanyol"),
    ("Las Palmas", "Leganes"),
    ("Valladolid", "Athletic"),
    ("Zaragoza", "Eibar"),
    ("Racing", "Sporting"),
    ("Granada", "Cadiz"),
    ("Almeria", "Elche"),
    ("Levante", "Huesca"),
    ("Oviedo", "Tenerife"),
]


def numbered_lines(matches):
    return [f"{i}. {home} - {away}" for i, (home, away) in enumerate(matches, start=1)]


@pytest.fixture
def tables():
    return NoiseTables()


@pytest.fixture
def noise_filter(tables):
    return NoiseFilter(tables)


@pytest.fixture
def extractor(tables):
    return MatchListExtractor(tables)


@pytest.fixture
def fourteen_lines():
    return numbered_lines(FOURTEEN_MATCHES)

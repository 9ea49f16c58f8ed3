from quiniela.models.enums import TextOrigin
from quiniela.models.match import MatchPair
from quiniela.services.jornada_import import (
    NO_MATCHES_MESSAGE,
    build_jornada_import,
    build_status_message,
)

from conftest import FOURTEEN_MATCHES


def make_pairs(matches):
    return [MatchPair(home_team=h, away_team=a) for h, a in matches]


def test_empty_list_gives_fifteen_empty_slots():
    jornada = build_jornada_import([])
    assert len(jornada.matches) == 15
    assert all(slot.is_empty for slot in jornada.matches)
    assert jornada.detected == 0
    assert jornada.message == NO_MATCHES_MESSAGE
    assert not jornada.complete


def test_partial_list_is_padded():
    jornada = build_jornada_import(make_pairs(FOURTEEN_MATCHES[:3]), TextOrigin.HTML)
    assert jornada.origin == TextOrigin.HTML
    assert jornada.detected == 3
    assert jornada.matches[0].home_team == "Real Madrid"
    assert jornada.matches[3].is_empty
    assert jornada.message == "3 partidos detectados. Revisa la tabla."


def test_last_slot_is_the_pleno():
    pairs = make_pairs(FOURTEEN_MATCHES + [("Getafe", "R.Sociedad")])
    jornada = build_jornada_import(pairs)
    assert jornada.complete
    assert jornada.matches[14].pleno
    assert jornada.matches[14].away_team == "R.Sociedad"
    assert not any(slot.pleno for slot in jornada.matches[:14])
    assert jornada.model_dump()["complete"] is True


def test_extra_pairs_are_dropped():
    extra = [(f"Local{chr(65 + i)}", f"Visita{chr(65 + i)}") for i in range(3)]
    jornada = build_jornada_import(make_pairs(FOURTEEN_MATCHES + extra))
    assert len(jornada.matches) == 15
    assert jornada.detected == 15


def test_status_message_singular():
    assert build_status_message(1) == "1 partido detectado. Revisa la tabla."

from typing import List, Sequence

from loguru import logger

from quiniela.models.enums import TextOrigin
from quiniela.models.jornada_import import JornadaImport
from quiniela.models.match import MAX_MATCHES, MatchPair, MatchSlot

NO_MATCHES_MESSAGE = (
    "No se detectaron partidos. Revisa la imagen o introduce los equipos a mano."
)


def build_status_message(detected: int) -> str:
    if detected == 0:
        return NO_MATCHES_MESSAGE
    if detected == 1:
        return "1 partido detectado. Revisa la tabla."
    return f"{detected} partidos detectados. Revisa la tabla."


def pad_to_slots(pairs: Sequence[MatchPair]) -> List[MatchSlot]:
    """Returns exactly 15 slots, the unfilled ones left empty for manual entry."""
    padded = list(pairs[:MAX_MATCHES]) + [None] * (MAX_MATCHES - min(len(pairs), MAX_MATCHES))
    return [MatchSlot.from_pair(pair, position) for position, pair in enumerate(padded)]


def build_jornada_import(
    pairs: Sequence[MatchPair], origin: TextOrigin = TextOrigin.OCR
) -> JornadaImport:
    """Wraps extracted pairs into the 15-row table the admin reviews.

    A short list is not an error: missing rows stay empty and the message
    tells the admin how many were found.
    """
    detected = min(len(pairs), MAX_MATCHES)
    if len(pairs) > MAX_MATCHES:
        logger.warning(f"Got {len(pairs)} pairs, keeping the first {MAX_MATCHES}.")
    jornada = JornadaImport(
        origin=origin,
        matches=pad_to_slots(pairs),
        detected=detected,
        message=build_status_message(detected),
    )
    logger.info(f"Prepared jornada import from {origin.value}: {detected}/{MAX_MATCHES} matches.")
    return jornada

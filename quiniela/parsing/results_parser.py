import re
from typing import List, Optional, Tuple

from loguru import logger

from quiniela.models.enums import Outcome1X2, PlenoGoals
from quiniela.models.results import JornadaResults, PlenoResult

REGULAR_MATCHES = 14
MAX_JORNADA_NUMBER = 60

# "LA QUINIELA JORNADA 32ª", "jornada 31", "30ª"
_JORNADA_HEADER_RE = re.compile(
    r"(?:LA\s+QUINIELA\s+)?JORNADA\s*(\d{1,3})(?!\d)\s*ª?|(?<!\d)(\d{1,3})\s*ª", re.IGNORECASE
)
_RESULT_CELL_RE = re.compile(
    r"(?:resultado|result|quiniela|celda|numero)[^>]*>\s*([1Xx2])\s*<", re.IGNORECASE
)
_QUOTED_SIGN_RE = re.compile(r"[\"']([1Xx2])[\"']")
_PLENO_NEAR_RE = re.compile(
    r"pleno[^0-9M]*([01M2])[\s\-]+([01M2])|([01M2])[\s\-]+([01M2])[^0-9M]*pleno",
    re.IGNORECASE,
)
_PLENO_CELL_RE = re.compile(
    r"(?:P-15|pleno\s*al\s*15)[^0-9M]*([01M2])[\s\-]+([01M2])|([01M2])[\s\-]+([01M2])\s*(?:\)|</)",
    re.IGNORECASE,
)


def _section_headers(html: str) -> List[Tuple[int, int]]:
    headers = []
    for match in _JORNADA_HEADER_RE.finditer(html):
        number = int(match.group(1) or match.group(2))
        if 1 <= number <= MAX_JORNADA_NUMBER:
            headers.append((match.start(), number))
    return headers


def _read_signs(fragment: str) -> Optional[List[Outcome1X2]]:
    signs = [match.group(1).upper() for match in _RESULT_CELL_RE.finditer(fragment)]
    if len(signs) < REGULAR_MATCHES:
        signs.extend(match.group(1).upper() for match in _QUOTED_SIGN_RE.finditer(fragment))
    if len(signs) < REGULAR_MATCHES:
        return None
    return [Outcome1X2(sign) for sign in signs[:REGULAR_MATCHES]]


def _pleno_from_match(match: Optional[re.Match]) -> Optional[PlenoResult]:
    if not match:
        return None
    home = match.group(1) or match.group(3)
    away = match.group(2) or match.group(4)
    if not home or not away:
        return None
    return PlenoResult(home=PlenoGoals(home.upper()), away=PlenoGoals(away.upper()))


def _read_pleno(fragment: str) -> Optional[PlenoResult]:
    pleno = _pleno_from_match(_PLENO_NEAR_RE.search(fragment))
    if pleno:
        return pleno
    # Often shown as "1-1" or "M-2" in a single cell
    return _pleno_from_match(_PLENO_CELL_RE.search(fragment))


def extract_results_from_fragment(fragment: str, number: int = 0) -> JornadaResults:
    """Reads 1X2 signs and the Pleno al 15 from one section of the page."""
    return JornadaResults(
        number=number, result_1x2=_read_signs(fragment), pleno_15=_read_pleno(fragment)
    )


def parse_results_by_jornada(html: str) -> List[JornadaResults]:
    """Splits the results page by jornada headers and reads each section.

    A page without headers is read as a single section numbered 0, which
    callers treat as "latest jornada". Sections with no data are dropped.
    """
    headers = _section_headers(html)
    if not headers:
        results = extract_results_from_fragment(html, 0)
        logger.debug(f"No jornada headers found; whole page has data: {results.has_data}")
        return [results] if results.has_data else []

    parsed: List[JornadaResults] = []
    for i, (start, number) in enumerate(headers):
        end = headers[i + 1][0] if i + 1 < len(headers) else len(html)
        results = extract_results_from_fragment(html[start:end], number)
        if results.has_data:
            parsed.append(results)
    logger.info(
        f"Read results for {len(parsed)} of {len(headers)} jornada sections."
    )
    return parsed

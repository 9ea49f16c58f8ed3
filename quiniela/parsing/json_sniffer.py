import json
import re
from typing import Any, Iterator, List, Optional

from bs4 import BeautifulSoup
from loguru import logger
from pydantic import ValidationError

from quiniela.models.match import MAX_MATCHES, MatchPair

MIN_JSON_MATCHES = 14
MIN_SCRIPT_LENGTH = 200
MAX_SEARCH_DEPTH = 12

HOME_KEYS = ["local", "home", "home_team", "homeTeam", "equipoLocal", "equipo1", "local_team"]
AWAY_KEYS = ["visitante", "away", "away_team", "awayTeam", "equipoVisitante", "equipo2", "visitor"]
NAME_KEYS = ["nombre", "name", "shortName", "nombreCorto", "label"]
SCRIPT_KEYWORDS = ["partidos", "visitante", "matches", "equipoLocal"]

# Start of an object literal holding the match list inside arbitrary JS
_LIST_OBJECT_RE = re.compile(r"\{\s*\"(?:partidos|matches|resultados|equipos)\"\s*:\s*\[")


def _team_name(value: Any) -> Optional[str]:
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, dict):
        for key in NAME_KEYS:
            if isinstance(value.get(key), str):
                return value[key].strip()
    return None


def _entry_to_pair(entry: Any) -> Optional[MatchPair]:
    if not isinstance(entry, dict):
        return None
    home = next(
        (name for name in (_team_name(entry.get(key)) for key in HOME_KEYS) if name), None
    )
    away = next(
        (name for name in (_team_name(entry.get(key)) for key in AWAY_KEYS) if name), None
    )
    if not home or not away:
        return None
    try:
        return MatchPair(home_team=home, away_team=away)
    except ValidationError:
        return None


def _iter_lists(data: Any, depth: int = 0) -> Iterator[List[Any]]:
    """Yields every list in a decoded JSON document, outermost first."""
    if depth > MAX_SEARCH_DEPTH:
        return
    if isinstance(data, list):
        yield data
        for item in data:
            if isinstance(item, (dict, list)):
                yield from _iter_lists(item, depth + 1)
    elif isinstance(data, dict):
        for value in data.values():
            if isinstance(value, (dict, list)):
                yield from _iter_lists(value, depth + 1)


def find_match_list(data: Any) -> Optional[List[MatchPair]]:
    """Finds the first array in ``data`` with at least 14 home/away entries."""
    for candidate in _iter_lists(data):
        if len(candidate) < MIN_JSON_MATCHES:
            continue
        pairs = [pair for pair in (_entry_to_pair(entry) for entry in candidate) if pair]
        if len(pairs) >= MIN_JSON_MATCHES:
            return pairs[:MAX_MATCHES]
    return None


def _decode_embedded_object(content: str) -> Iterator[Any]:
    decoder = json.JSONDecoder()
    for match in _LIST_OBJECT_RE.finditer(content):
        try:
            data, _ = decoder.raw_decode(content, match.start())
        except (ValueError, RecursionError) as e:
            logger.debug(f"Embedded match object did not decode: {e}")
            continue
        yield data


def sniff_matches_from_html(html: str) -> Optional[List[MatchPair]]:
    """Returns the match list embedded as JSON in the page, or None.

    Tried in order: JSON-typed script tags, the ``__NEXT_DATA__`` tag, then
    any large script mentioning match fields. The first block holding 14+
    usable entries wins and is returned as-is (first 15).
    """
    if not html:
        return None
    soup = BeautifulSoup(html, "html.parser")

    json_scripts = [
        script
        for script in soup.find_all("script", attrs={"type": re.compile(r"json", re.IGNORECASE)})
        if script.get("id") != "__NEXT_DATA__"
    ]
    for script in json_scripts:
        try:
            data = json.loads(script.string or "")
        except (ValueError, RecursionError) as e:
            logger.debug(f"Skipping JSON script tag that does not parse: {e}")
            continue
        pairs = find_match_list(data)
        if pairs:
            logger.info(f"Found {len(pairs)} matches in embedded JSON script tag.")
            return pairs

    next_data = soup.find("script", id="__NEXT_DATA__")
    if next_data:
        try:
            data = json.loads(next_data.string or "")
        except (ValueError, RecursionError) as e:
            logger.debug(f"__NEXT_DATA__ did not parse: {e}")
        else:
            pairs = find_match_list(data)
            if pairs:
                logger.info(f"Found {len(pairs)} matches in __NEXT_DATA__.")
                return pairs

    for script in soup.find_all("script"):
        content = script.string or ""
        if len(content) < MIN_SCRIPT_LENGTH:
            continue
        if not any(keyword in content for keyword in SCRIPT_KEYWORDS):
            continue
        for data in _decode_embedded_object(content):
            pairs = find_match_list(data)
            if pairs:
                logger.info(f"Found {len(pairs)} matches in inline script data.")
                return pairs

    logger.debug("No embedded match data found in page.")
    return None

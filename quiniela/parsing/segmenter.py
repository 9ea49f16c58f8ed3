import re
from typing import List, Optional

from loguru import logger
from pydantic import BaseModel

from .noise_tables import NoiseTables
from .text_normalizer import SEPARATOR

# "JORNADA 12", "Jornada Nº 12", "12ª JORNADA", "J. 12"
SECTION_MARKER_RE = re.compile(
    r"\bJORNADA\s*(?:N[º°o]\.?\s*)?\d{1,2}\b|\b\d{1,2}\s*[ªº]\s*JORNADA\b|^J\.?\s*\d{1,2}\b",
    re.IGNORECASE,
)
_NAME_WORD_RE = re.compile(r"[^\W\d_]{3,}")

# Section markers further down are footers ("próxima jornada 13"), not headers
HEADER_WINDOW = 10
BANNER_WINDOW = 6


class Segmentation(BaseModel):
    """Lines of the normalized text and where the match list starts."""

    lines: List[str]
    offsets: List[int]  # Character offset of each line in the normalized text
    start_index: int = 0


def find_section_marker(lines: List[str]) -> Optional[int]:
    for index, line in enumerate(lines[:HEADER_WINDOW]):
        if SECTION_MARKER_RE.search(line):
            return index
    return None


def _looks_like_match_line(line: str) -> bool:
    # "1 GETAFE - OSASUNA 1X2" carries banner vocabulary but is a real row
    if SEPARATOR not in line:
        return False
    left, _, right = line.partition(SEPARATOR)
    return bool(_NAME_WORD_RE.search(left)) and bool(_NAME_WORD_RE.search(right))


def find_last_banner_line(lines: List[str], tables: NoiseTables) -> Optional[int]:
    last_index = None
    for index, line in enumerate(lines[:BANNER_WINDOW]):
        upper = line.upper()
        if any(word in upper for word in tables.banner_words) and not _looks_like_match_line(line):
            last_index = index
    return last_index


def segment_lines(normalized: str, tables: NoiseTables) -> Segmentation:
    """Splits normalized text into lines and finds where the match list starts."""
    lines: List[str] = []
    offsets: List[int] = []
    position = 0
    for raw_line in normalized.split("\n"):
        line = raw_line.strip()
        if line:
            lines.append(line)
            offsets.append(position + raw_line.index(line[0]))
        position += len(raw_line) + 1

    marker_index = find_section_marker(lines)
    if marker_index is not None:
        logger.debug(f"Section marker on line {marker_index}: '{lines[marker_index]}'")
        return Segmentation(lines=lines, offsets=offsets, start_index=marker_index + 1)

    banner_index = find_last_banner_line(lines, tables)
    if banner_index is not None:
        logger.debug(f"Skipping banner lines up to {banner_index}")
        return Segmentation(lines=lines, offsets=offsets, start_index=banner_index + 1)

    return Segmentation(lines=lines, offsets=offsets, start_index=0)

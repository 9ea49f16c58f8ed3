import re
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional, Sequence, Tuple

from quiniela.models.enums import ExtractionStrategy
from quiniela.models.match import MAX_MATCHES, CandidatePair

from .noise_filter import NoiseFilter
from .text_normalizer import SEPARATOR, has_separator

MAX_RUN_TOKENS = 4

_TOKEN_RE = re.compile(r"^[^\W\d_][\w.'/&]*$")
_BARE_DASH_RE = re.compile(r"(?<=\S)-(?=\S)")

# One word of a team name; a dot is allowed unless it starts a dot-run
_WORD = r"[^\W\d_](?:[\w'/&]|\.(?!\.))*"
# Words of one name stay on one line
_GAP = r"[^\S\n]+"
_BLOB_PAIR_RE = re.compile(
    rf"({_WORD}(?:{_GAP}{_WORD}){{0,4}})\s+-\s+({_WORD}(?:{_GAP}{_WORD}){{0,4}}?)"
    rf"(?=[^\S\n]*[,;…|]|[^\S\n]*\.{{2,}}|[^\S\n]*\d[^\S\n]*[Xx][^\S\n]*\d|{_GAP}\d|[^\S\n]*(?:\n|$))"
)
_GENERIC_PAIR_RE = re.compile(
    r"(?:^|\s)(?:\d{1,2}\.|P-15)?[^\S\n]*([\w.'/ ]{2,35}?)\s+-\s+([\w.'/ ]{2,35}?)"
    r"(?=\s*(?:\||\d-\d|\d\s*\|\s*[1Xx2M])|[^\S\n]*(?:\n|$))"
)
MIN_BLOB_SEGMENTS = 30


def leading_capitalized_run(
    text: str, stop_tokens: Sequence[str] = (), max_tokens: int = MAX_RUN_TOKENS
) -> List[str]:
    """Returns the capitalized words at the start of ``text``, up to a stop token."""
    stops = {token.upper() for token in stop_tokens}
    run: List[str] = []
    for token in text.split():
        if token.upper() in stops:
            break
        if not _TOKEN_RE.match(token) or not token[0].isupper():
            break
        run.append(token)
        if len(run) >= max_tokens:
            break
    return run


def line_index_at(text: str, offset: int) -> int:
    return text.count("\n", 0, offset)


class Extractor(ABC):
    """A strategy that locates raw (home, away) pairs in normalized text."""

    strategy: ExtractionStrategy

    @abstractmethod
    def extract(self, text: str) -> List[CandidatePair]:
        """Returns candidate pairs in text order; validation happens downstream."""
        pass


class LinePairExtractor:
    """Builds the candidates for a single line: dash split first, then two tokens."""

    def __init__(self, noise_filter: NoiseFilter):
        self.noise_filter = noise_filter
        self.compound_leads = {
            lead.upper() for lead in noise_filter.tables.compound_leads
        }
        self.stop_tokens = noise_filter.tables.pleno_stop_tokens

    def split_on_separator(self, line: str) -> Optional[Tuple[str, str]]:
        """Splits at the first usable separator, preferring the canonical " - "."""
        start = 0
        while True:
            position = line.find(SEPARATOR, start)
            if position == -1:
                break
            left = line[:position].strip()
            right = line[position + len(SEPARATOR) :].strip()
            if left and right:
                return left, right
            start = position + 1

        # OCR that lost the spaces: "GETAFE-OSASUNA"
        for match in _BARE_DASH_RE.finditer(line):
            left = line[: match.start()].strip()
            right = line[match.end() :].strip()
            if left and right:
                return left, right
        return None

    def split_two_tokens(self, line: str) -> Optional[Tuple[str, str]]:
        """Dashless "CELTA RAYO" style rows."""
        stripped = self.noise_filter.strip_match_prefix(line)
        tokens = leading_capitalized_run(stripped, self.stop_tokens)
        if len(tokens) == 2:
            return tokens[0], tokens[1]
        if len(tokens) == 3:
            if tokens[0].upper() in self.compound_leads:
                return " ".join(tokens[:2]), tokens[2]
            if tokens[1].upper() in self.compound_leads:
                return tokens[0], " ".join(tokens[1:])
            return None
        if len(tokens) == 4:
            return " ".join(tokens[:2]), " ".join(tokens[2:])
        return None

    def candidates(self, line: str, index: int, offset: int) -> Iterator[CandidatePair]:
        split = self.split_on_separator(line)
        if split:
            yield CandidatePair(
                home_raw=split[0],
                away_raw=split[1],
                source_line_index=index,
                offset=offset,
                strategy=ExtractionStrategy.LINE,
            )
        if has_separator(line):
            return
        split = self.split_two_tokens(line)
        if split:
            yield CandidatePair(
                home_raw=split[0],
                away_raw=split[1],
                source_line_index=index,
                offset=offset,
                strategy=ExtractionStrategy.TWO_TOKEN,
            )


class BlobRegexExtractor(Extractor):
    """Bounded "name - name" scan over the whole text, one name per line."""

    strategy = ExtractionStrategy.BLOB_REGEX

    def extract(self, text: str) -> List[CandidatePair]:
        return [
            CandidatePair(
                home_raw=match.group(1),
                away_raw=match.group(2),
                source_line_index=line_index_at(text, match.start(1)),
                offset=match.start(1),
                strategy=self.strategy,
            )
            for match in _BLOB_PAIR_RE.finditer(text)
        ]


class SegmentPairingExtractor(Extractor):
    """Positional pairing of " - " segments for unbroken blobs of ~15 pairs."""

    strategy = ExtractionStrategy.SEGMENT_PAIRING

    def extract(self, text: str) -> List[CandidatePair]:
        blob = text.replace("\n", " ")
        segments = []
        offset = 0
        for part in blob.split(SEPARATOR):
            segment = part.strip()
            if len(segment) > 1:
                segments.append((offset, segment))
            offset += len(part) + len(SEPARATOR)
        if len(segments) < MIN_BLOB_SEGMENTS:
            return []

        candidates = []
        for i in range(MAX_MATCHES):
            if 2 * i + 1 >= len(segments):
                break
            offset, home = segments[2 * i]
            _, away = segments[2 * i + 1]
            candidates.append(
                CandidatePair(
                    home_raw=home,
                    away_raw=away,
                    source_line_index=line_index_at(text, offset),
                    offset=offset,
                    strategy=self.strategy,
                )
            )
        return candidates


class GenericRegexExtractor(Extractor):
    """Last resort: permissive "X - Y" with minimal stop conditions."""

    strategy = ExtractionStrategy.GENERIC_REGEX

    def extract(self, text: str) -> List[CandidatePair]:
        return [
            CandidatePair(
                home_raw=match.group(1),
                away_raw=match.group(2),
                source_line_index=line_index_at(text, match.start(1)),
                offset=match.start(1),
                strategy=self.strategy,
            )
            for match in _GENERIC_PAIR_RE.finditer(text)
        ]

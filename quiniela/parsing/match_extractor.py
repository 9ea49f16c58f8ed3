from typing import List, Optional

from loguru import logger

from quiniela.models.enums import TextOrigin
from quiniela.models.match import CandidatePair, MatchPair, RawText

from .accumulator import MatchAccumulator
from .html_text import html_to_text
from .json_sniffer import sniff_matches_from_html
from .noise_filter import NoiseFilter
from .noise_tables import NoiseTables, get_noise_tables
from .pleno import PlenoRecoverer
from .segmenter import Segmentation, segment_lines
from .strategies import (
    BlobRegexExtractor,
    Extractor,
    GenericRegexExtractor,
    LinePairExtractor,
    SegmentPairingExtractor,
)
from .text_normalizer import normalize_text

# Line extraction is considered good enough from 14 pairs on (Pleno may be missing)
MIN_LINE_MATCHES = 14
# Lines still scanned for the Pleno after the 14th pair was found
PLENO_SCAN_WINDOW = 6


class MatchListExtractor:
    """Turns OCR or results-page text into the ordered list of jornada matches."""

    def __init__(self, tables: Optional[NoiseTables] = None):
        self.tables = tables or get_noise_tables()
        self.noise_filter = NoiseFilter(self.tables)
        self.line_extractor = LinePairExtractor(self.noise_filter)
        self.pleno = PlenoRecoverer(self.noise_filter)
        # Ordered by specificity; each runs only while fewer than 14 pairs are known
        self.fallback_strategies: List[Extractor] = [
            BlobRegexExtractor(),
            SegmentPairingExtractor(),
            GenericRegexExtractor(),
        ]
        logger.debug(
            f"MatchListExtractor initialized with {len(self.fallback_strategies)} fallback strategies."
        )

    def parse(self, raw: RawText) -> List[MatchPair]:
        """Dispatches on origin: raw HTML gets the JSON sniffer first."""
        if raw.origin == TextOrigin.HTML:
            return self.extract_from_html(raw.text)
        return self.extract(raw.text)

    def extract_from_html(self, html: str) -> List[MatchPair]:
        if not isinstance(html, str):
            raise TypeError(f"Expected page markup as str, got {type(html).__name__}")
        embedded = sniff_matches_from_html(html)
        if embedded:
            return embedded
        return self.extract(html_to_text(html))

    def extract(self, text: str) -> List[MatchPair]:
        """Extracts up to 15 (home, away) pairs from OCR or HTML-derived text.

        Never raises on bad input: lines that do not parse are skipped and an
        empty or partial list is a valid result.
        """
        if not isinstance(text, str):
            raise TypeError(f"Expected text as str, got {type(text).__name__}")

        normalized = normalize_text(text)
        if not normalized:
            logger.debug("Empty text after normalization, nothing to extract.")
            return []

        segmentation = segment_lines(normalized, self.tables)
        accumulator = MatchAccumulator(self.noise_filter)

        self._scan_lines(segmentation, accumulator)
        logger.debug(f"Line scan produced {accumulator.count} pairs.")

        if accumulator.count < MIN_LINE_MATCHES:
            self._run_fallbacks(normalized, accumulator)

        if accumulator.count == MIN_LINE_MATCHES:
            self.pleno.recover_loose(segmentation, accumulator)
        if accumulator.count == MIN_LINE_MATCHES:
            self.pleno.recover_from_hints(normalized, accumulator)

        pairs = accumulator.pairs()
        logger.info(
            f"Extracted {len(pairs)} matches from {len(segmentation.lines)} lines "
            f"({len(normalized)} chars)."
        )
        return pairs

    def _scan_lines(self, segmentation: Segmentation, accumulator: MatchAccumulator) -> None:
        lines = segmentation.lines
        index = segmentation.start_index
        fourteenth_index: Optional[int] = None

        while index < len(lines) and not accumulator.is_full:
            if accumulator.count >= MIN_LINE_MATCHES:
                if fourteenth_index is None:
                    fourteenth_index = index
                elif index - fourteenth_index >= PLENO_SCAN_WINDOW:
                    logger.debug("Pleno al 15 not found near the 14th match, stopping line scan.")
                    break

            trigger = self.pleno.should_trigger(accumulator.count, index, segmentation)
            # Near the end of a short list the line itself is tried before the Pleno
            if trigger and self.pleno.expects_pleno(accumulator.count):
                # A dashless 14th row with the Pleno still below it
                if accumulator.count < MIN_LINE_MATCHES and self.pleno.room_after(
                    segmentation, index
                ):
                    if self._offer_line(segmentation, index, accumulator):
                        index += 1
                        continue
                if self.pleno.try_lines(segmentation, index, accumulator):
                    index += 2
                    continue
                trigger = False

            if self._offer_line(segmentation, index, accumulator):
                index += 1
                continue
            if trigger and self.pleno.try_lines(segmentation, index, accumulator):
                index += 2
                continue
            index += 1

    def _offer_line(
        self, segmentation: Segmentation, index: int, accumulator: MatchAccumulator
    ) -> bool:
        for candidate in self.line_extractor.candidates(
            segmentation.lines[index], index, segmentation.offsets[index]
        ):
            if accumulator.offer(candidate):
                return True
        return False

    def _run_fallbacks(self, normalized: str, accumulator: MatchAccumulator) -> None:
        for strategy in self.fallback_strategies:
            if accumulator.count >= MIN_LINE_MATCHES:
                break
            candidates: List[CandidatePair] = strategy.extract(normalized)
            before = accumulator.count
            for candidate in candidates:
                if accumulator.is_full:
                    break
                accumulator.offer(candidate)
            logger.debug(
                f"Fallback {strategy.strategy.value}: {len(candidates)} candidates, "
                f"{accumulator.count - before} new pairs."
            )


# Module-level default extractor, built on first use
_default_extractor: Optional[MatchListExtractor] = None


def get_extractor() -> MatchListExtractor:
    global _default_extractor
    if _default_extractor is None:
        _default_extractor = MatchListExtractor()
    return _default_extractor


def extract_matches(text: str) -> List[MatchPair]:
    """Extracts the jornada matches from OCR or HTML-derived text."""
    return get_extractor().extract(text)


def extract_matches_from_html(html: str) -> List[MatchPair]:
    """Extracts the jornada matches from raw results-page markup."""
    return get_extractor().extract_from_html(html)

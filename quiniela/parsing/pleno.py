import re
from typing import Optional

from loguru import logger

from quiniela.models.enums import ExtractionStrategy
from quiniela.models.match import CandidatePair, MatchPair

from .accumulator import MatchAccumulator
from .noise_filter import NoiseFilter
from .segmenter import Segmentation
from .strategies import leading_capitalized_run
from .text_normalizer import has_separator

PLENO_TRIGGER_COUNTS = (13, 14)
TAIL_LINES = 3
LOOSE_PASS_LINES = 5
HINT_TAIL_CHARS = 320

# The away cell ends at a comma, a dot-run or the page/match number after it
_AWAY_CELL_END_RE = re.compile(r"\s*(?:,|…|\.{2,}|\s\d).*$")


class PlenoRecoverer:
    """Recovers the Pleno al 15, usually printed over two lines without a dash."""

    def __init__(self, noise_filter: NoiseFilter):
        self.noise_filter = noise_filter
        self.tables = noise_filter.tables

    def should_trigger(self, count: int, index: int, segmentation: Segmentation) -> bool:
        lines = segmentation.lines
        if index + 1 >= len(lines):
            return False
        near_end = index >= len(lines) - TAIL_LINES
        if count not in PLENO_TRIGGER_COUNTS and not near_end:
            return False
        return not self._has_dash(lines[index]) and not self._has_dash(lines[index + 1])

    def expects_pleno(self, count: int) -> bool:
        """True once the regular matches are (nearly) all in."""
        return count in PLENO_TRIGGER_COUNTS

    def room_after(self, segmentation: Segmentation, index: int) -> bool:
        """True if the two lines after ``index`` could still hold the Pleno."""
        lines = segmentation.lines
        if index + 2 >= len(lines):
            return False
        return not self._has_dash(lines[index + 1]) and not self._has_dash(lines[index + 2])

    def _has_dash(self, line: str) -> bool:
        return has_separator(self.noise_filter.strip_match_prefix(line))

    def candidate_from_lines(
        self, segmentation: Segmentation, index: int, strategy: ExtractionStrategy
    ) -> Optional[CandidatePair]:
        home_line = self.noise_filter.strip_junk_prefixes(segmentation.lines[index])
        home_tokens = leading_capitalized_run(home_line, self.tables.pleno_stop_tokens)
        if not home_tokens:
            return None

        away_line = self.noise_filter.strip_match_prefix(segmentation.lines[index + 1])
        away_line = _AWAY_CELL_END_RE.sub("", away_line)
        away_tokens = leading_capitalized_run(away_line, self.tables.pleno_stop_tokens)
        if not away_tokens:
            return None

        return CandidatePair(
            home_raw=" ".join(home_tokens),
            away_raw=" ".join(away_tokens),
            source_line_index=index,
            offset=segmentation.offsets[index],
            strategy=strategy,
        )

    def try_lines(
        self,
        segmentation: Segmentation,
        index: int,
        accumulator: MatchAccumulator,
        strategy: ExtractionStrategy = ExtractionStrategy.PLENO,
    ) -> Optional[MatchPair]:
        candidate = self.candidate_from_lines(segmentation, index, strategy)
        if candidate is None:
            return None
        pair = accumulator.offer(candidate)
        if pair:
            accumulator.consumed_lines.add(index + 1)
        return pair

    def recover_loose(
        self, segmentation: Segmentation, accumulator: MatchAccumulator
    ) -> Optional[MatchPair]:
        """Second pass over the last lines when the main scan ended on 14 pairs."""
        lines = segmentation.lines
        for index in range(max(0, len(lines) - LOOSE_PASS_LINES), len(lines) - 1):
            if {index, index + 1} & accumulator.consumed_lines:
                continue
            if self._has_dash(lines[index]) or self._has_dash(lines[index + 1]):
                continue
            pair = self.try_lines(
                segmentation, index, accumulator, ExtractionStrategy.PLENO_LOOSE
            )
            if pair:
                logger.info(f"Pleno al 15 recovered on loose pass: {pair.key}")
                return pair
        return None

    def recover_from_hints(
        self, normalized: str, accumulator: MatchAccumulator
    ) -> Optional[MatchPair]:
        """Seed-table guesses for slips where only part of the Pleno was read."""
        tail = normalized[-HINT_TAIL_CHARS:].upper()
        for hint in self.tables.pleno_hints:
            if hint.marker.upper() not in tail:
                continue
            # Marker already read as part of a regular match
            if any(hint.marker.upper() in team.upper() for team in accumulator.team_names()):
                continue
            pair = accumulator.offer(
                CandidatePair(
                    home_raw=hint.home,
                    away_raw=hint.away,
                    source_line_index=normalized.count("\n"),
                    offset=len(normalized),
                    strategy=ExtractionStrategy.PLENO_HINT,
                )
            )
            if pair:
                logger.warning(f"Pleno al 15 guessed from hint table: {pair.key}")
                return pair
        return None

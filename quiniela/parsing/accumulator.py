from typing import List, Optional, Set, Tuple

from loguru import logger

from quiniela.models.match import MAX_MATCHES, CandidatePair, MatchPair
from quiniela.utils.misc_utils import generate_pair_key, truncate

from .noise_filter import NoiseFilter


class MatchAccumulator:
    """Per-call collection of accepted pairs.

    Every candidate, whichever strategy found it, goes through the same
    cleaning and acceptance test here. The ``seen`` keys stop overlapping
    strategies from emitting a pair twice.
    """

    def __init__(self, noise_filter: NoiseFilter, limit: int = MAX_MATCHES):
        self.noise_filter = noise_filter
        self.limit = limit
        self.seen: Set[str] = set()
        # Line indices already read into an accepted pair
        self.consumed_lines: Set[int] = set()
        self._accepted: List[Tuple[int, int, MatchPair]] = []

    @property
    def count(self) -> int:
        return len(self._accepted)

    @property
    def is_full(self) -> bool:
        return self.count >= self.limit

    def team_names(self) -> List[str]:
        names = []
        for _, _, pair in self._accepted:
            names.extend([pair.home_team, pair.away_team])
        return names

    def offer(self, candidate: CandidatePair) -> Optional[MatchPair]:
        """Cleans and validates a candidate; returns the MatchPair if it was kept."""
        if self.is_full:
            return None
        accepted = self.noise_filter.accept_pair(candidate.home_raw, candidate.away_raw)
        if accepted is None:
            logger.trace(
                f"Rejected {candidate.strategy.value} candidate "
                f"'{truncate(candidate.home_raw)}' / '{truncate(candidate.away_raw)}'"
            )
            return None
        home, away = accepted
        key = generate_pair_key(home, away)
        if key in self.seen:
            return None
        self.seen.add(key)
        self.consumed_lines.add(candidate.source_line_index)
        pair = MatchPair(home_team=home, away_team=away)
        self._accepted.append((candidate.offset, len(self._accepted), pair))
        logger.debug(
            f"Accepted #{self.count} via {candidate.strategy.value} "
            f"(line {candidate.source_line_index}): {home} - {away}"
        )
        return pair

    def pairs(self) -> List[MatchPair]:
        """Accepted pairs in the order they appear in the text."""
        return [pair for _, _, pair in sorted(self._accepted, key=lambda item: item[:2])]

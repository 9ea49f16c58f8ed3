from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .enums import ExtractionStrategy, TextOrigin

MAX_MATCHES = 15  # 14 regular matches + Pleno al 15
PLENO_INDEX = 14


class RawText(BaseModel):
    """Text handed to the extractor, tagged with where it came from."""

    model_config = ConfigDict(frozen=True)

    text: str
    origin: TextOrigin = TextOrigin.OCR


class CandidatePair(BaseModel):
    """An unvalidated (home, away) pair located by one extraction strategy."""

    model_config = ConfigDict(frozen=True)

    home_raw: str
    away_raw: str
    source_line_index: int = 0
    offset: int = 0  # Character position in the normalized text, used for ordering
    strategy: ExtractionStrategy = ExtractionStrategy.LINE


class MatchPair(BaseModel):
    """A cleaned, accepted match of the jornada."""

    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    home_team: str = Field(..., min_length=2, max_length=50)
    away_team: str = Field(..., min_length=2, max_length=50)

    @property
    def key(self) -> str:
        return f"{self.home_team}|{self.away_team}"


class MatchSlot(BaseModel):
    """One of the 15 rows the admin reviews; empty strings mean "fill by hand"."""

    home_team: str = ""
    away_team: str = ""
    pleno: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.home_team and not self.away_team

    @classmethod
    def from_pair(cls, pair: Optional[MatchPair], position: int) -> "MatchSlot":
        if pair is None:
            return cls(pleno=position == PLENO_INDEX)
        return cls(
            home_team=pair.home_team,
            away_team=pair.away_team,
            pleno=position == PLENO_INDEX,
        )

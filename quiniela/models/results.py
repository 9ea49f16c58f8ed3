from typing import List, Optional

from pydantic import BaseModel, Field

from .enums import Outcome1X2, PlenoGoals


class PlenoResult(BaseModel):
    """Goal buckets of the Pleno al 15 match."""

    home: PlenoGoals
    away: PlenoGoals


class JornadaResults(BaseModel):
    """Results read from one jornada section of the results page.

    ``number`` is 0 when the page had no jornada headers and the whole page
    was read as a single (latest) section.
    """

    number: int = Field(..., ge=0)
    result_1x2: Optional[List[Outcome1X2]] = None  # Exactly 14 signs when present
    pleno_15: Optional[PlenoResult] = None

    @property
    def has_data(self) -> bool:
        return self.result_1x2 is not None or self.pleno_15 is not None

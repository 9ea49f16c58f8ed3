from typing import List

from pydantic import BaseModel, computed_field

from .enums import TextOrigin
from .match import MAX_MATCHES, MatchSlot


class JornadaImport(BaseModel):
    """The 15 slots proposed to the admin plus a status message for review."""

    origin: TextOrigin
    matches: List[MatchSlot]
    detected: int
    message: str

    @computed_field  # type: ignore[misc]
    @property
    def complete(self) -> bool:
        """True when every slot, Pleno al 15 included, was detected."""
        return self.detected >= MAX_MATCHES

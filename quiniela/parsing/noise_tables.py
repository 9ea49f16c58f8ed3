"""
OCR noise tables used by the match-list extractor.

Every table here was tuned against real slip photos and results pages. They are
plain data so they can be extended (or replaced from a JSON file, see
``QUINIELA_NOISE_TABLES_PATH``) without touching the parsing code.
"""

from pathlib import Path
from typing import Dict, List, Optional

from loguru import logger
from pydantic import BaseModel, Field

from quiniela.config.settings import settings


class PatternRule(BaseModel):
    """A regex and what to replace its match with."""

    pattern: str
    replacement: str = ""


class PlenoHint(BaseModel):
    """If ``marker`` shows up at the end of the text, assume ``home - away`` is the Pleno."""

    marker: str
    home: str
    away: str


# Strong banner vocabulary: any name containing one of these is header text
DEFAULT_STRONG_NOISE = [
    "PRONOSTICO",
    "PRONÓSTICO",
    "QUINIELA",
    "JORNADA",
    "DIA/HORA",
    "DÍA/HORA",
    "DIA HORA",
    "DÍA HORA",
    "1X2",
    "LUNES",
    "MARTES",
    "MIERCOLES",
    "MIÉRCOLES",
    "JUEVES",
    "VIERNES",
    "SABADO",
    "SÁBADO",
    "DOMINGO",
    "BOTE",
    "CIERRE",
    "PART.",
]

# Recurring OCR garbage, only trusted on short names
DEFAULT_SHORT_NOISE = ["MEX", "BOM", "BÓM", "TPXI", "DMETIX", "SABE", "DMPOITI", "MO OF"]

DEFAULT_BANNER_WORDS = [
    "PRONOSTICO",
    "PRONÓSTICO",
    "QUINIELA",
    "DIA/HORA",
    "DÍA/HORA",
    "DIA HORA",
    "1X2",
    "PART.",
    "BOTE",
    "CIERRE",
]

# Leading junk merged into the home cell from the day/time and 1X2 columns
DEFAULT_JUNK_PREFIXES = [
    PatternRule(pattern=r"^(?:\d\s*)?(?i:mex)\s*2\s*"),
    PatternRule(pattern=r"^(?:\d\s*)?(?i:b[oó]m)(?=\s|[A-ZÀ-Þ])\s*"),
    PatternRule(pattern=r"^(?:\d\s*)?(?i:menitixiz)\s*"),
    PatternRule(pattern=r"^(?:\d\s*)?(?i:tpxi2i|tpxi2|tpxi|tpx12)\s+"),
    PatternRule(pattern=r"^(?:\d\s*)?(?i:dmetixiz|dmetix)\s+"),
    PatternRule(pattern=r"^(?:\d\s*)?(?i:sabe)\s+(?i:tx)\s*\d?\s*"),
    PatternRule(pattern=r"^AB\s+"),
    PatternRule(
        pattern=r"^(?i:lun|mar|mi[eé]|jue|vie|s[aá]b|dom)[a-záéíóú]*\.?\s*\d{1,2}[:.h]\d{2}\s*"
    ),
    PatternRule(pattern=r"^\d{1,2}[:.h]\d{2}\s+"),
    PatternRule(pattern=r"^(?i:1\s*x\s*2)\s+"),
]

# Stray match number and odds-column glyphs left at the end of a name
DEFAULT_TRAILING_ARTIFACTS = [
    PatternRule(pattern=r"\s+\d{1,2}\s*[|\[\]{}][\s|\[\]{}1Xx2Il]*$"),
    PatternRule(pattern=r"\s*[|\[\]{}][\s|\[\]{}1Xx2Il]*$"),
]

DEFAULT_CANONICAL_NAMES = {
    "ROVIEDO": "OVIEDO",
    "ESPANVOL": "ESPANYOL",
    "ESPANOL": "ESPANYOL",
    "RSOCIEDAD": "R.SOCIEDAD",
}

# Tokens that leak from the 1X2 column right after a 1-2 digit number
DEFAULT_COLUMN_NOISE_TOKENS = ["X", "1X2", "MEX", "BOM", "TPXI", "DMETIX", "SABE", "PART"]

# A two-line Pleno home cell ends at the first of these
DEFAULT_PLENO_STOP_TOKENS = ["X", "1X2", "MO", "OF", "MEX", "TPXI", "DMETIX", "PART", "PART."]

# First word of two-word team names, used to split dashless three-word lines
DEFAULT_COMPOUND_LEADS = [
    "REAL",
    "R.",
    "ATLETICO",
    "ATLÉTICO",
    "ATL.",
    "AT.",
    "ATHLETIC",
    "DEPORTIVO",
    "DEP.",
    "RACING",
    "SPORTING",
    "UNION",
    "UNIÓN",
    "LAS",
    "RAYO",
]

# Seed data observed on real slips, not a general rule
DEFAULT_PLENO_HINTS = [PlenoHint(marker="MALLORCA", home="RAYO", away="MALLORCA")]


class NoiseTables(BaseModel):
    """All empirically tuned tables consumed by the extractor."""

    strong_noise: List[str] = Field(default_factory=lambda: list(DEFAULT_STRONG_NOISE))
    exact_noise: List[str] = Field(default_factory=lambda: ["PART", "1X2"])
    short_noise: List[str] = Field(default_factory=lambda: list(DEFAULT_SHORT_NOISE))
    short_noise_max_length: int = 10
    banner_words: List[str] = Field(default_factory=lambda: list(DEFAULT_BANNER_WORDS))
    junk_prefixes: List[PatternRule] = Field(
        default_factory=lambda: list(DEFAULT_JUNK_PREFIXES)
    )
    trailing_artifacts: List[PatternRule] = Field(
        default_factory=lambda: list(DEFAULT_TRAILING_ARTIFACTS)
    )
    canonical_names: Dict[str, str] = Field(
        default_factory=lambda: dict(DEFAULT_CANONICAL_NAMES)
    )
    column_noise_tokens: List[str] = Field(
        default_factory=lambda: list(DEFAULT_COLUMN_NOISE_TOKENS)
    )
    pleno_stop_tokens: List[str] = Field(
        default_factory=lambda: list(DEFAULT_PLENO_STOP_TOKENS)
    )
    compound_leads: List[str] = Field(default_factory=lambda: list(DEFAULT_COMPOUND_LEADS))
    pleno_hints: List[PlenoHint] = Field(default_factory=lambda: list(DEFAULT_PLENO_HINTS))


def load_noise_tables(path: Optional[Path] = None) -> NoiseTables:
    """Loads noise tables from a JSON file; missing keys keep their defaults."""
    if path is None:
        return NoiseTables()
    try:
        tables = NoiseTables.model_validate_json(Path(path).read_text(encoding="utf-8"))
    except Exception as e:
        logger.error(f"Could not load noise tables from {path}: {e}")
        raise
    logger.info(f"Loaded noise tables from {path}")
    return tables


# Module-level storage for the configured tables
_noise_tables: Optional[NoiseTables] = None


def get_noise_tables() -> NoiseTables:
    """Returns the tables configured in settings, loading them once."""
    global _noise_tables
    if _noise_tables is None:
        _noise_tables = load_noise_tables(settings.noise_tables_path)
        if not settings.pleno_hints_enabled:
            _noise_tables = _noise_tables.model_copy(update={"pleno_hints": []})
    return _noise_tables

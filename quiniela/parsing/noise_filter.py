import re
from typing import Optional, Tuple

from loguru import logger

from .noise_tables import NoiseTables

MIN_NAME_LENGTH = 2
MAX_NAME_LENGTH = 50
MAX_PREFIX_PASSES = 10

WEEKDAY_ABBREVIATIONS = r"(?:LUN|MAR|MI[EÉ]|JUE|VIE|S[AÁ]B|DOM)"

# "1.", "2)", "15 ", "P-15", and OCR "l." / "I." read for "1."
_MATCH_PREFIX_RE = re.compile(
    r"^\s*(?:P\s*-?\s*15\s*[.:)]?|\d{1,2}\s*[.)\]*]+|\d{1,2}\s+(?=[^\W\d_])|[lI|][.)])\s*"
)
# Next row's number glued inside a blob capture: "Olimpiacos 2.Celtic"
_EMBEDDED_MATCH_NUMBER_RE = re.compile(r"(?:^|\s)(?:P-?15|\d{1,2}[.)])\s*(?=[^\W\d_])")
_COMMA_ELLIPSIS_RE = re.compile(r"\s*(?:,|…|\.{2,}).*$")
_ODDS_CELL_RE = re.compile(r"\s*(?<![\w.])\d\s*[Xx]\s*\d(?!\w).*$")
_TRAILING_NUMBERS_RE = re.compile(r"(?:\s+\d+)+$")
_TRAILING_PUNCTUATION_RE = re.compile(r"[\s,;:!?¡¿·•*_~\"'`´+=<>/\\-]+$|\s*\.{2,}$")
# A lone trailing dot after a full word is noise; after "Atl" or "Dep" it is an abbreviation
_TRAILING_DOT_RE = re.compile(r"(?<=[^\W\d_]{4})\.$")
_PIPE_BETWEEN_LETTERS_RE = re.compile(r"(?<=[^\W\d_])\|(?=[^\W\d_])")
_NUMERIC_ONLY_RE = re.compile(r"^[\d\s.,:/-]+$")
_DOTS_ONLY_RE = re.compile(r"^[.\s]+$")
_TIME_NEAR_WEEKDAY_RE = re.compile(
    rf"\d{{1,2}}:\d{{2}}\s*{WEEKDAY_ABBREVIATIONS}|{WEEKDAY_ABBREVIATIONS}\.?\s*\d{{1,2}}:\d{{2}}",
    re.IGNORECASE,
)
_ISOLATED_ODDS_RE = re.compile(r"^\d\s*X\s*\d$", re.IGNORECASE)


class NoiseFilter:
    """Header/noise classifier and per-name noise trimmer, driven by NoiseTables."""

    def __init__(self, tables: NoiseTables):
        self.tables = tables
        self.strong_noise = [word.upper() for word in tables.strong_noise]
        self.exact_noise = {word.upper() for word in tables.exact_noise}
        self.short_noise = [word.upper() for word in tables.short_noise]
        self.canonical_names = {
            misread.upper(): correct for misread, correct in tables.canonical_names.items()
        }
        self.junk_prefixes = [
            (re.compile(rule.pattern), rule.replacement) for rule in tables.junk_prefixes
        ]
        self.trailing_artifacts = [
            (re.compile(rule.pattern), rule.replacement)
            for rule in tables.trailing_artifacts
        ]
        noise_tokens = "|".join(
            re.escape(token)
            for token in sorted(tables.column_noise_tokens, key=len, reverse=True)
        )
        # A 1-2 digit day/number cell followed by more digits or 1X2 column tokens
        self.numeric_column_re = re.compile(
            rf"\s+\d{{1,2}}(?:(?=\d)|(?=[\s:./h]+\d)|(?=\s+(?:{noise_tokens})(?!\w))).*$",
            re.IGNORECASE,
        )
        logger.debug(
            f"NoiseFilter initialized with {len(self.junk_prefixes)} junk prefixes "
            f"and {len(self.canonical_names)} canonical names."
        )

    # --- Classifier ---

    def is_header_noise(self, name: str) -> bool:
        """True if the name looks like banner/UI text rather than a team."""
        text = name.strip().upper()
        if len(text) < MIN_NAME_LENGTH:
            return True
        if _DOTS_ONLY_RE.match(text):
            return True
        if text.count(".") >= 3 or ".." in text:
            return True
        if text in self.exact_noise:
            return True
        if any(word in text for word in self.strong_noise):
            return True
        if _TIME_NEAR_WEEKDAY_RE.search(text) or _ISOLATED_ODDS_RE.match(text):
            return True
        if len(text) < self.tables.short_noise_max_length and any(
            word in text for word in self.short_noise
        ):
            return True
        return False

    def is_acceptable_name(self, name: str) -> bool:
        if not MIN_NAME_LENGTH <= len(name) <= MAX_NAME_LENGTH:
            return False
        if _NUMERIC_ONLY_RE.match(name):
            return False
        return not self.is_header_noise(name)

    # --- Trimmer ---

    def strip_match_prefix(self, name: str) -> str:
        return _MATCH_PREFIX_RE.sub("", name, count=1).strip()

    def strip_junk_prefixes(self, name: str) -> str:
        """Strips table-driven junk prefixes until none applies (bounded)."""
        current = name.strip()
        for _ in range(MAX_PREFIX_PASSES):
            previous = current
            for pattern, replacement in self.junk_prefixes:
                current = pattern.sub(replacement, current, count=1).strip()
            current = self.strip_match_prefix(current)
            if current == previous:
                break
        return current

    def trim_numeric_columns(self, name: str) -> str:
        name = _ODDS_CELL_RE.sub("", name)
        return self.numeric_column_re.sub("", name).strip()

    def trim_comma_ellipsis(self, name: str) -> str:
        return _COMMA_ELLIPSIS_RE.sub("", name).strip()

    def strip_trailing_noise(self, name: str) -> str:
        current = name
        for _ in range(MAX_PREFIX_PASSES):
            previous = current
            for pattern, replacement in self.trailing_artifacts:
                current = pattern.sub(replacement, current).strip()
            current = _TRAILING_NUMBERS_RE.sub("", current)
            current = _TRAILING_PUNCTUATION_RE.sub("", current)
            current = _TRAILING_DOT_RE.sub("", current).strip()
            if current == previous:
                break
        return current

    def canonicalize(self, name: str) -> str:
        return self.canonical_names.get(name.upper(), name)

    def clean_name(self, raw: str, side: str = "home") -> str:
        """Runs one side of a candidate pair through the whole trimmer."""
        name = re.sub(r"\s+", " ", raw).strip()
        name = self.strip_match_prefix(name)
        if side == "home":
            # Keep only what follows the last glued row number
            name = _EMBEDDED_MATCH_NUMBER_RE.split(name)[-1]
        else:
            name = _EMBEDDED_MATCH_NUMBER_RE.split(name)[0]
        name = self.strip_junk_prefixes(name)
        name = self.trim_comma_ellipsis(name)
        name = self.trim_numeric_columns(name)
        name = _PIPE_BETWEEN_LETTERS_RE.sub("I", name)
        name = self.strip_trailing_noise(name)
        name = re.sub(r"\s+", " ", name).strip()
        return self.canonicalize(name)

    def clean_pair(self, home_raw: str, away_raw: str) -> Tuple[str, str]:
        return self.clean_name(home_raw, "home"), self.clean_name(away_raw, "away")

    def accept_pair(self, home_raw: str, away_raw: str) -> Optional[Tuple[str, str]]:
        """Cleans both sides and returns them if both pass the acceptance test."""
        home, away = self.clean_pair(home_raw, away_raw)
        if not self.is_acceptable_name(home) or not self.is_acceptable_name(away):
            return None
        return home, away

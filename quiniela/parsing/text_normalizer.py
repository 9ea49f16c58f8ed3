import re

SEPARATOR = " - "

# Hyphen-minus is handled apart: inside a word ("Saint-Etienne", "P-15") it stays
UNICODE_DASHES = "\u2010\u2011\u2012\u2013\u2014\u2015\u2212\ufe58\ufe63\uff0d"

_DASH_ENTITY_RE = re.compile(
    r"&(?:ndash|mdash|minus|hyphen|dash);|&#(?:8208|8209|8210|8211|8212|8213|8722|45);|&#x(?:2010|2011|2012|2013|2014|2015|2212|2d);",
    re.IGNORECASE,
)
_UNICODE_DASH_RE = re.compile(rf"[^\S\n]*[{UNICODE_DASHES}][^\S\n]*")
# A hyphen run touching whitespace, swallowing neighbouring runs ("a- - -b", "a -- b")
_SPACED_HYPHEN_RE = re.compile(
    r"[^\S\n]+-+(?:[^\S\n]+-+)*[^\S\n]*|-+(?:[^\S\n]+-+)+[^\S\n]*|-+[^\S\n]+"
)
# "GETAFE.-OSASUNA": a dot glued to a dash between two names
_DOT_DASH_RE = re.compile(r"(?<=\w)\.[^\S\n]*-+[^\S\n]*(?=\w)")
_HORIZONTAL_SPACE_RE = re.compile(r"[^\S\n]+")
_LINE_BREAK_RE = re.compile(r"\r\n?|[\u2028\u2029\x0b\x0c\x85]")


def normalize_text(text: str) -> str:
    """Canonicalizes dashes and whitespace in OCR or HTML-derived text.

    Every dash-like separator becomes " - ", horizontal whitespace collapses
    to single spaces, and line breaks survive (one trimmed, non-empty line per
    row) so the segmenter can still see the row structure. Normalizing
    already-normalized text is a no-op.
    """
    if not text:
        return ""
    normalized = _LINE_BREAK_RE.sub("\n", text)
    normalized = _DASH_ENTITY_RE.sub(SEPARATOR, normalized)
    normalized = _UNICODE_DASH_RE.sub(SEPARATOR, normalized)
    normalized = _SPACED_HYPHEN_RE.sub(SEPARATOR, normalized)
    normalized = _DOT_DASH_RE.sub(SEPARATOR, normalized)
    normalized = _HORIZONTAL_SPACE_RE.sub(" ", normalized)
    lines = (line.strip() for line in normalized.split("\n"))
    return "\n".join(line for line in lines if line)


def has_separator(line: str) -> bool:
    """True if the line holds a canonical separator or a hyphen glued between letters."""
    return SEPARATOR in line or re.search(r"[^\W\d_]-[^\W\d_]", line) is not None

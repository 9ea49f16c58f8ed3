from enum import Enum


class TextOrigin(str, Enum):
    OCR = "ocr"  # Raw OCR engine output for a slip photo
    HTML = "html"  # Raw markup of the results page


class ExtractionStrategy(str, Enum):
    LINE = "line"
    TWO_TOKEN = "two_token"  # Dashless "CELTA RAYO" lines
    PLENO = "pleno"
    PLENO_LOOSE = "pleno_loose"
    PLENO_HINT = "pleno_hint"
    BLOB_REGEX = "blob_regex"
    SEGMENT_PAIRING = "segment_pairing"
    GENERIC_REGEX = "generic_regex"


class Outcome1X2(str, Enum):
    HOME = "1"
    DRAW = "X"
    AWAY = "2"


class PlenoGoals(str, Enum):
    ZERO = "0"
    ONE = "1"
    TWO = "2"
    MORE = "M"  # Three goals or more

# quiniela/utils/misc_utils.py
import re


def generate_pair_key(*names: str) -> str:
    """Generates a consistent deduplication key from one or more team names."""
    # Case and spacing differences between strategies must not defeat dedup
    return "|".join(re.sub(r"\s+", " ", str(name)).strip().casefold() for name in names)


def truncate(value: str, limit: int = 80) -> str:
    """Shortens a string for log messages."""
    value = value.replace("\n", "\\n")
    if len(value) <= limit:
        return value
    return value[: limit - 3] + "..."

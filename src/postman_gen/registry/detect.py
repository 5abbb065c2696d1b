"""Auto-detect where routes come from."""

from pathlib import Path

TABLE_SUFFIXES = (".yaml", ".yml", ".json")


def detect_source(source: str) -> str:
    """Detect whether SOURCE is a route-table file or an app import string.

    Returns: 'table' or 'app'.
    """
    path = Path(source)
    if path.suffix.lower() in TABLE_SUFFIXES or path.is_file():
        return "table"
    return "app"

"""In-process run editing engine"""

from runedit.engine.cleaner import PotentialCleanUp, SumOfBestCleaner
from runedit.engine.editor import EditorClosedError, RunEditor
from runedit.engine.timespan import ParseError, format_duration, parse_count, parse_duration

__all__ = [
    "EditorClosedError",
    "ParseError",
    "PotentialCleanUp",
    "RunEditor",
    "SumOfBestCleaner",
    "format_duration",
    "parse_count",
    "parse_duration",
]

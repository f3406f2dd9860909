"""runedit - editing session for speedrun splits"""

__version__ = "0.1.0"

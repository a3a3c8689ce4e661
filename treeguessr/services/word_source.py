"""
Word Source

Loads the candidate phrase list from a newline-delimited text file. Each
non-empty, whitespace-trimmed line is one phrase; phrases may contain spaces.
"""

import logging
from collections import Counter
from pathlib import Path
from typing import List, Union

from ..config.game_settings import ALPHABET

logger = logging.getLogger(__name__)

_ALLOWED_CHARS = set(ALPHABET + " ")


class WordSourceError(Exception):
    """Raised when the phrase list cannot be loaded or is empty."""


def parse_word_list(text: str) -> List[str]:
    """
    Parse newline-delimited phrases.

    Lines are upper-cased and interior whitespace collapsed. Lines with
    characters other than letters and spaces are skipped, as are duplicates.

    Returns:
        List[str]: Phrases in file order
    """
    phrases: List[str] = []
    seen = set()
    for line_number, line in enumerate(text.splitlines(), start=1):
        phrase = " ".join(line.upper().split())
        if not phrase:
            continue
        if not set(phrase) <= _ALLOWED_CHARS:
            logger.warning("Skipping word list line %d: %r contains non-alphabetic characters",
                           line_number, line.strip())
            continue
        if phrase in seen:
            continue
        seen.add(phrase)
        phrases.append(phrase)
    return phrases


def load_word_list(path: Union[str, Path]) -> List[str]:
    """
    Load phrases from a word list file.

    Raises:
        WordSourceError: If the file cannot be read or yields no phrases
    """
    path = Path(path)
    try:
        text = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        raise WordSourceError(f"Word list file could not be read: {path} ({e})") from e

    phrases = parse_word_list(text)
    if not phrases:
        raise WordSourceError(f"Word list is empty: {path}")

    logger.info("Loaded %d phrases from %s", len(phrases), path)
    return phrases


def get_word_statistics(phrases: List[str]) -> dict:
    """
    Summarise the phrase collection for monitoring.

    Returns:
        dict: total_phrases, multi_word_phrases, avg_length, most_common_letters
    """
    if not phrases:
        return {"error": "Word list is empty"}

    letter_frequency = Counter(char for phrase in phrases for char in phrase if char != " ")

    return {
        "total_phrases": len(phrases),
        "multi_word_phrases": sum(1 for phrase in phrases if " " in phrase),
        "avg_length": round(sum(len(phrase) for phrase in phrases) / len(phrases), 2),
        "most_common_letters": letter_frequency.most_common(5),
    }

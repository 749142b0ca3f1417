"""Content length and readability metrics."""

import re
from typing import Optional

from ..models import ContentMetrics


# Syllables are only counted over this many leading words
SYLLABLE_WORD_LIMIT = 1000

VOWELS = frozenset("aeiouy")

_SENTENCE_END = re.compile(r"[.!?]+")
_NON_ALPHA = re.compile(r"[^a-z]")


def count_syllables(word: str) -> int:
    """Estimate syllables in a word by counting vowel groups.

    A trailing silent "e" is dropped when the word has more than one group,
    and any word with letters has at least one syllable.
    """
    word = _NON_ALPHA.sub("", word.lower())
    if not word:
        return 0

    count = 0
    previous_vowel = False
    for char in word:
        is_vowel = char in VOWELS
        if is_vowel and not previous_vowel:
            count += 1
        previous_vowel = is_vowel

    if word.endswith("e") and count > 1:
        count -= 1
    return max(count, 1)


def flesch_reading_ease(words: int, sentences: int, syllables: int) -> Optional[float]:
    """Flesch Reading Ease rounded to one decimal, or None without words or sentences."""
    if words == 0 or sentences == 0:
        return None
    score = 206.835 - 1.015 * (words / sentences) - 84.6 * (syllables / words)
    return round(score, 1)


def analyze_content(text: str) -> ContentMetrics:
    """Compute word, sentence and syllable counts plus Flesch Reading Ease."""
    tokens = text.split()
    words = len(tokens)

    sentences = len(_SENTENCE_END.findall(text))
    if tokens and sentences == 0:
        sentences = 1

    syllables = sum(count_syllables(w) for w in tokens[:SYLLABLE_WORD_LIMIT])

    return ContentMetrics(
        words=words,
        sentences=sentences,
        syllables=syllables,
        flesch_reading_ease=flesch_reading_ease(words, sentences, syllables),
    )

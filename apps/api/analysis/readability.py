"""
Script readability scoring.

Splits a script into its bolded ``**Heading:**`` sections, scores each one with
Flesch Reading Ease and maps the score onto a rough US grade level. The whole
script passes when its sections average grade 3.5 or below.
"""

import math
import re
from decimal import Decimal, ROUND_HALF_UP
from typing import List, Tuple

import numpy as np

from .models import ScriptComponent, ScriptComponentReadability, ScriptReadabilityAnalysis

DEFAULT_HEADING = "Introduction"
PASSING_GRADE_LEVEL = 3.5
VOWELS = "aeiouy"

# (minimum score, grade), highest threshold first
GRADE_BANDS: List[Tuple[int, int]] = [
    (90, 1),
    (80, 2),
    (70, 3),
    (60, 6),
    (50, 8),
    (30, 10),
]
LOWEST_GRADE = 12

# applied after lower(); anything outside ASCII letters and digits splits words
_NON_WORD_CHARS = re.compile(r"[^a-z0-9\s]")
_SENTENCE_BREAKS = re.compile(r"[.!?]+")


def find_heading_markers(script: str) -> List[Tuple[int, int, str]]:
    """
    Locate ``**Label:**`` markers with a single left-to-right scan.

    Grammar: ``**`` + one or more non-``*`` characters ending in ``:`` + ``**``.
    Matches never overlap; after a match the scan resumes behind its closing
    ``**``, otherwise it moves one character forward.

    Returns:
        List of (start, end, heading) with ``end`` exclusive.
    """
    markers = []
    length = len(script)
    i = 0
    while i < length - 1:
        if script[i] == "*" and script[i + 1] == "*":
            j = i + 2
            while j < length and script[j] != "*":
                j += 1
            label = script[i + 2:j]
            if len(label) >= 2 and label.endswith(":") and script.startswith("**", j):
                markers.append((i, j + 2, label[:-1].strip()))
                i = j + 2
                continue
        i += 1
    return markers


def split_components(script: str) -> List[ScriptComponent]:
    """Segment a script into heading-delimited components, in order."""
    normalized = script.replace("\r\n", "\n")
    headings: List[str] = []
    contents: List[str] = []
    last_index = 0

    for start, end, heading in find_heading_markers(normalized):
        # Text ahead of the first marker has no heading to belong to.
        if headings:
            contents[-1] = normalized[last_index:start].strip()
        headings.append(heading)
        contents.append("")
        last_index = end

    trailing = normalized[last_index:].strip()
    if not headings:
        return [ScriptComponent(heading=DEFAULT_HEADING, content=trailing or normalized)]
    contents[-1] = trailing
    return [ScriptComponent(heading=h, content=c) for h, c in zip(headings, contents)]


def tokenize(text: str) -> List[str]:
    """Lowercase words with punctuation treated as whitespace."""
    return _NON_WORD_CHARS.sub(" ", text.lower()).split()


def count_syllables(word: str) -> int:
    """Approximate syllables by counting vowel groups, minus a silent trailing 'e'."""
    count = 0
    previous_was_vowel = False
    for char in word.lower():
        is_vowel = char in VOWELS
        if is_vowel and not previous_was_vowel:
            count += 1
        previous_was_vowel = is_vowel

    if word.endswith("e"):
        count = max(1, count - 1)
    return max(1, count)


def count_sentences(text: str) -> int:
    return sum(1 for fragment in _SENTENCE_BREAKS.split(text) if fragment.strip())


def flesch_reading_ease(text: str, words: List[str]) -> int:
    """Flesch Reading Ease rounded half-up and clamped to 0-100; 0 for empty text."""
    sentences = count_sentences(text)
    if sentences == 0 or not words:
        return 0

    syllables = sum(count_syllables(word) for word in words)
    avg_sentence_length = len(words) / sentences
    avg_syllables_per_word = syllables / len(words)
    score = 206.835 - 1.015 * avg_sentence_length - 84.6 * avg_syllables_per_word

    return max(0, min(100, math.floor(score + 0.5)))


def score_to_grade_level(score: float) -> int:
    for threshold, grade in GRADE_BANDS:
        if score >= threshold:
            return grade
    return LOWEST_GRADE


def format_grade(value: float) -> str:
    """One decimal place, rounding the exact binary value half-up."""
    return str(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


class ReadabilityAnalyzer:
    """Scores each component of a script and aggregates a pass/fail verdict."""

    def analyze(self, script: str) -> ScriptReadabilityAnalysis:
        components = [self._score_component(c) for c in split_components(script)]

        grades = [c.grade_level for c in components]
        average = float(np.mean(grades)) if grades else 0.0

        return ScriptReadabilityAnalysis(
            average_grade_level=format_grade(average),
            passes_third_grade_test=average <= PASSING_GRADE_LEVEL,
            components=components,
        )

    def _score_component(self, component: ScriptComponent) -> ScriptComponentReadability:
        words = tokenize(component.content)
        score = flesch_reading_ease(component.content, words)
        return ScriptComponentReadability(
            heading=component.heading,
            content=component.content.strip(),
            word_count=len(words),
            readability_score=score,
            grade_level=score_to_grade_level(score),
        )


_default_analyzer = ReadabilityAnalyzer()


def analyze_script(script: str) -> ScriptReadabilityAnalysis:
    """Module-level shortcut for ``ReadabilityAnalyzer().analyze``."""
    return _default_analyzer.analyze(script)

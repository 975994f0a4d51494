"""Per-sentence pressure scoring from classification and vague verbs."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import IntEnum

from vectorpad.sentence import LockPolicy, Sentence, Tag

_ASCII_UPPER_TO_LOWER = str.maketrans(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ", "abcdefghijklmnopqrstuvwxyz"
)
_WORD = re.compile(r"[^ \t\n]+")

_LOCK_SCORES = {
    LockPolicy.HARD: (0, None),
    LockPolicy.SOFT: (15, "soft-locked"),
    LockPolicy.MODAL_SPAN: (20, "modal-span"),
    LockPolicy.NONE: (30, "unlocked"),
}

_TAG_SCORES = {
    Tag.SPECULATION: (30, "speculation"),
    Tag.TENTATIVE: (15, "tentative"),
    Tag.QUESTION: (10, "question"),
    Tag.EXPLANATION: (5, None),
}


class Level(IntEnum):
    """Pressure tier of a sentence."""

    LOW = 0
    MEDIUM = 1
    HIGH = 2


@dataclass(frozen=True)
class SentenceScore:
    """Pressure assessment of one sentence."""

    index: int
    level: Level
    score: int
    signals: list[str] = field(default_factory=list)


def _is_alpha(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def contains_word(text: str, word: str) -> bool:
    """True when word occurs in text bounded by non-letters, ignoring ASCII case."""
    lower = text.translate(_ASCII_UPPER_TO_LOWER)
    needle = word.translate(_ASCII_UPPER_TO_LOWER)
    start = lower.find(needle)
    while start >= 0:
        end = start + len(needle)
        start_ok = start == 0 or not _is_alpha(lower[start - 1])
        end_ok = end >= len(lower) or not _is_alpha(lower[end])
        if start_ok and end_ok:
            return True
        start = lower.find(needle, start + 1)
    return False


def _score_sentence(sentence: Sentence, vague_verbs: Iterable[str]) -> tuple[int, list[str]]:
    total = 0
    signals: list[str] = []

    for points, signal in (_LOCK_SCORES.get(sentence.lock_policy, (0, None)),
                           _TAG_SCORES.get(sentence.tag, (0, None))):
        total += points
        if signal:
            signals.append(signal)

    vague = next((v for v in vague_verbs if contains_word(sentence.text, v)), None)
    if vague is not None:
        total += 30
        signals.append(f"vague: {vague}")

    words = len(_WORD.findall(sentence.text))
    if words <= 3:
        total += 20
        signals.append("very short")
    elif words <= 6:
        total += 10
        signals.append("short")

    return min(total, 100), signals


def score(
    sentences: Iterable[Sentence] | None,
    vague_verbs: Iterable[str] | None,
) -> list[SentenceScore]:
    """Score each sentence's pressure from its lock policy, tag, wording and length."""
    verbs = list(dict.fromkeys(vague_verbs or ()))
    results = []
    for index, sentence in enumerate(sentences or ()):
        value, signals = _score_sentence(sentence, verbs)
        if value >= 60:
            level = Level.HIGH
        elif value >= 30:
            level = Level.MEDIUM
        else:
            level = Level.LOW
        results.append(SentenceScore(index=index, level=level, score=value, signals=signals))
    return results
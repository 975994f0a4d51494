"""Pre-flight projections: token weight, vector integrity, CPD, TTC and CDR."""

from __future__ import annotations

import json
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from vectorpad.sentence import Sentence, Tag

# Estimated input pricing per 1K tokens for CPD projection.
DEFAULT_INPUT_COST_PER_1K = 0.003

_ASCII_WORD_SINGLE_TOKEN_MAX = 8
_ASCII_WORD_CHUNK_SIZE = 4
_NON_ASCII_BYTES_PER_TOKEN = 3
_NUMBER_DIGITS_PER_TOKEN = 3
_SYMBOL_BYTES_PER_TOKEN = 2
_SPACE_RUN_CHUNK_SIZE = 8

_NOT_SPACE = frozenset("\x1c\x1d\x1e\x1f")


@dataclass(frozen=True)
class TokenWeight:
    """Estimated and reference token counts."""

    estimated: int
    actual_tiktoken: int
    delta_percent: float
    within_ten_percent: bool


@dataclass(frozen=True)
class VectorIntegrity:
    """Share of sentences whose meaning is locked."""

    locked_sentences: int
    total_sentences: int
    ratio: float
    percentage: float


@dataclass(frozen=True)
class Metrics:
    """Pre-flight projections derived from classified text."""

    token_weight: TokenWeight
    vector_integrity: VectorIntegrity
    cpd_projection: float
    ttc_projection: float
    cdr_projection: float

    def to_dict(self) -> dict[str, Any]:
        """Return the metrics as a JSON-ready dictionary."""
        tw = self.token_weight
        vi = self.vector_integrity
        return {
            "token_weight": {
                "estimated": tw.estimated,
                "actual_tiktoken": tw.actual_tiktoken,
                "delta_percent": tw.delta_percent,
                "within_ten_percent": tw.within_ten_percent,
            },
            "vector_integrity": {
                "locked_sentences": vi.locked_sentences,
                "total_sentences": vi.total_sentences,
                "ratio": vi.ratio,
                "percentage": vi.percentage,
            },
            "cpd_projection": self.cpd_projection,
            "ttc_projection": self.ttc_projection,
            "cdr_projection": self.cdr_projection,
        }


def _ceil_div(value: int, divisor: int) -> int:
    if value <= 0:
        return 0
    return (value + divisor - 1) // divisor


def _is_space(char: str) -> bool:
    return char.isspace() and char not in _NOT_SPACE


def _is_word_char(char: str) -> bool:
    return char.isalpha() or char == "'"


def _space_run_tokens(count: int) -> int:
    return _ceil_div(count, _SPACE_RUN_CHUNK_SIZE) if count > 0 else 0


def _word_tokens(segment: str) -> int:
    clean = segment.replace("'", "")
    if not clean:
        return 1
    if all(ord(c) < 128 and c.isalpha() for c in clean):
        if len(clean) <= _ASCII_WORD_SINGLE_TOKEN_MAX:
            return 1
        return 1 + _ceil_div(len(clean) - _ASCII_WORD_SINGLE_TOKEN_MAX, _ASCII_WORD_CHUNK_SIZE)
    return max(1, _ceil_div(len(clean.encode("utf-8")), _NON_ASCII_BYTES_PER_TOKEN))


def _take_while(text: str, start: int, predicate) -> int:
    end = start
    while end < len(text) and predicate(text[end]):
        end += 1
    return end


def _is_symbol(char: str) -> bool:
    return not (_is_space(char) or char.isalpha() or char.isdecimal() or char == "'")


def count_tokens(text: str) -> int:
    """Approximate a cl100k-style token count for text."""
    tokens = 0
    index = 0
    length = len(text)
    while index < length:
        spaces = 0
        while index < length and _is_space(text[index]):
            if text[index] in "\n\r":
                tokens += 1
            else:
                spaces += 1
            index += 1

        if index >= length:
            tokens += _space_run_tokens(spaces)
            break

        current = text[index]
        if _is_word_char(current):
            end = _take_while(text, index, _is_word_char)
            tokens += _word_tokens(text[index:end])
            tokens += _space_run_tokens(spaces - 1)
        elif current.isdecimal():
            end = _take_while(text, index, str.isdecimal)
            tokens += _ceil_div(end - index, _NUMBER_DIGITS_PER_TOKEN)
            tokens += _space_run_tokens(spaces)
        else:
            end = _take_while(text, index, _is_symbol)
            segment = text[index:end]
            tokens += max(1, _ceil_div(len(segment.encode("utf-8")), _SYMBOL_BYTES_PER_TOKEN))
            tokens += _space_run_tokens(spaces - 1)
        index = end
    return tokens


def _delta_percent(estimated: int, actual: int) -> float:
    if actual == 0:
        return 0.0 if estimated == 0 else 100.0
    return (estimated - actual) / actual * 100.0


def _project_ttc(decisions: int, tentatives: int, questions: int,
                 speculations: int, integrity: float) -> float:
    uncertainty = tentatives + questions + speculations * 1.25
    stability_penalty = 1.0 + (1.0 - integrity) * 0.5
    turns = 1.0 + (uncertainty / decisions) * stability_penalty
    return max(turns, 1.0)


def _project_cdr(total: int, locked: int, tentatives: int,
                 questions: int, speculations: int) -> float:
    if total == 0:
        return 0.0
    unlocked_ratio = (total - locked) / total
    soft_risk = (tentatives + questions + speculations) / total
    return min(max(unlocked_ratio * 0.7 + soft_risk * 0.3, 0.0), 1.0)


def _join_sentences(sentences: Iterable[Sentence]) -> str:
    return " ".join(t for t in (s.text.strip() for s in sentences) if t)


def compute(text: str, sentences: Sequence[Sentence] | None) -> Metrics:
    """Calculate pre-flight metrics for text and its classified sentences."""
    sentences = list(sentences or ())
    normalized = text.strip() or _join_sentences(sentences)

    actual = count_tokens(normalized)
    estimated = actual
    delta = _delta_percent(estimated, actual)

    total = len(sentences)
    locked = sum(1 for s in sentences if s.lock_policy.locked)
    ratio = locked / total if total else 0.0

    def count(tag: Tag) -> int:
        return sum(1 for s in sentences if s.tag == tag)

    decisions = count(Tag.DECISION) or 1
    questions = count(Tag.QUESTION)
    tentatives = count(Tag.TENTATIVE)
    speculations = count(Tag.SPECULATION)

    cpd = (estimated / 1000.0 * DEFAULT_INPUT_COST_PER_1K) / decisions
    ttc = _project_ttc(decisions, tentatives, questions, speculations, ratio)
    cdr = _project_cdr(total, locked, tentatives, questions, speculations)

    return Metrics(
        token_weight=TokenWeight(
            estimated=estimated,
            actual_tiktoken=actual,
            delta_percent=delta,
            within_ten_percent=abs(delta) <= 10.0,
        ),
        vector_integrity=VectorIntegrity(
            locked_sentences=locked,
            total_sentences=total,
            ratio=ratio,
            percentage=ratio * 100.0,
        ),
        cpd_projection=cpd,
        ttc_projection=ttc,
        cdr_projection=cdr,
    )


def render_human(metrics: Metrics) -> str:
    """Return a readable metric report."""
    tw = metrics.token_weight
    vi = metrics.vector_integrity
    lines = [
        "PREFLIGHT",
        f"  Token weight: est {tw.estimated} tokens | actual {tw.actual_tiktoken}"
        f" | delta {tw.delta_percent:.2f}%",
        f"  Vector integrity: {vi.percentage:.2f}% "
        f"({vi.locked_sentences}/{vi.total_sentences} locked)",
        f"  CPD projection: ${metrics.cpd_projection:.6f} per decision",
        f"  TTC projection: {metrics.ttc_projection:.2f} turns",
        f"  CDR projection: {metrics.cdr_projection:.3f}",
    ]
    return "\n".join(lines)


def render_json(metrics: Metrics) -> str:
    """Return an indented JSON representation of metrics."""
    return json.dumps(metrics.to_dict(), indent=2)
"""Classified sentence types shared by the analysis modules."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Tag(str, Enum):
    """Semantic role of a sentence within a directive."""

    DECISION = "DECISION"
    CONSTRAINT = "CONSTRAINT"
    TENTATIVE = "TENTATIVE"
    SPECULATION = "SPECULATION"
    EXPLANATION = "EXPLANATION"
    QUESTION = "QUESTION"


class LockPolicy(str, Enum):
    """How strongly a sentence's meaning is anchored."""

    NONE = "none"
    HARD = "hard"
    SOFT = "soft"
    MODAL_SPAN = "modal_span"

    @property
    def locked(self) -> bool:
        """True for any policy other than NONE."""
        return self is not LockPolicy.NONE


@dataclass(frozen=True)
class Sentence:
    """A sentence of input text with its classification."""

    text: str
    tag: Tag | None = None
    lock_policy: LockPolicy = LockPolicy.NONE
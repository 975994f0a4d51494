"""Mapping of classified sentences onto an Oracul case filing."""

from __future__ import annotations

from collections.abc import Iterable

from vectorpad.oracul_types import CaseFiling
from vectorpad.sentence import Sentence, Tag


def map_sentences(sentences: Iterable[Sentence] | None) -> CaseFiling:
    """Build a case filing from classified sentences.

    The first DECISION becomes the decision and later ones go to the context;
    CONSTRAINT, TENTATIVE and SPECULATION sentences become constraints,
    alternatives and known risks; EXPLANATION sentences join the context.
    QUESTION sentences are left out. Without any DECISION, all text becomes
    the decision.
    """
    items = list(sentences or ())
    decision = ""
    context: list[str] = []
    constraints: list[str] = []
    alternatives: list[str] = []
    known_risks: list[str] = []

    for sentence in items:
        text = sentence.text.strip()
        if not text:
            continue
        if sentence.tag is Tag.DECISION:
            if decision:
                context.append(text)
            else:
                decision = text
        elif sentence.tag is Tag.CONSTRAINT:
            constraints.append(text)
        elif sentence.tag is Tag.TENTATIVE:
            alternatives.append(text)
        elif sentence.tag is Tag.SPECULATION:
            known_risks.append(text)
        elif sentence.tag is Tag.EXPLANATION:
            context.append(text)

    if not decision:
        decision = " ".join(t for t in (s.text.strip() for s in items) if t)

    return CaseFiling(
        decision=decision,
        context=". ".join(context),
        constraints=constraints,
        alternatives=alternatives,
        known_risks=known_risks,
    )


def extract_question(sentences: Iterable[Sentence] | None, full_text: str) -> str:
    """Return the first non-empty QUESTION sentence, or full_text if there is none."""
    for sentence in sentences or ():
        if sentence.tag is Tag.QUESTION:
            text = sentence.text.strip()
            if text:
                return text
    return full_text
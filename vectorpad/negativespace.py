"""Detection of missing constraint classes ("negative space") in directives."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

_FLAGS = re.IGNORECASE | re.ASCII


class GapClass(str, Enum):
    """Category of missing constraint."""

    PRESERVATION = "preservation"
    SUCCESS = "success"
    REVIEW = "review"
    ROLLBACK = "rollback"
    SCOPE_BOUNDARY = "scope_boundary"
    IDENTITY = "identity"


@dataclass(frozen=True)
class Gap:
    """A single detected missing constraint."""

    gap_class: GapClass
    signal: str
    description: str
    nudge_prompt: str


@dataclass
class Result:
    """Outcome of a negative space analysis."""

    gaps: list[Gap] = field(default_factory=list)
    action_signals: int = 0
    scope_signals: int = 0

    def clean(self) -> bool:
        """True when no gaps were detected."""
        return not self.gaps


DESTRUCTIVE_VERBS = (
    "clean", "remove", "delete", "drop", "replace", "rewrite",
    "overwrite", "strip", "purge", "nuke", "wipe",
)

CONTENT_VERBS = (
    "rewrite", "update", "edit", "revise", "rephrase",
    "clean up", "standardize", "align", "normalize", "format",
)

_GENERAL_VERBS = (
    "refactor", "migrate", "move", "rename", "convert",
    "fix", "patch", "improve", "simplify", "tidy", "organize",
)


def _compile(*patterns: str) -> tuple[re.Pattern[str], ...]:
    return tuple(re.compile(p, _FLAGS) for p in patterns)


_ACTION_PATTERNS = tuple(
    re.compile(r"\b" + re.escape(verb) + r"\b", _FLAGS)
    for verb in dict.fromkeys(DESTRUCTIVE_VERBS + CONTENT_VERBS + _GENERAL_VERBS)
)

_SCOPE_PATTERNS = _compile(
    r"\ball\s+repos?\b",
    r"\bevery\s+repo\b",
    r"\bacross\s+(all\s+)?repos?\b",
    r"\bacross\s+the\s+codebase\b",
    r"\bacross\s+(all\s+)?projects?\b",
    r"\ball\s+files?\b",
    r"\bevery\s+file\b",
    r"\ball\s+readmes?\b",
    r"\ball\s+packages?\b",
    r"\ball\s+services?\b",
    r"\beverywhere\b",
    r"\b\d+\s+repos?\b",
)

_BROAD_QUANTIFIERS = _compile(
    r"\ball\b",
    r"\bevery\b",
    r"\beverywhere\b",
    r"\beach\s+(?:repo|file|project|service|package)\b",
)

_PRESERVATION = _compile(
    r"\bpreserve\b",
    r"\bkeep\b",
    r"\bdon'?t\s+change\b",
    r"\bdo\s+not\s+change\b",
    r"\bdon'?t\s+touch\b",
    r"\bdo\s+not\s+touch\b",
    r"\bdon'?t\s+remove\b",
    r"\bdo\s+not\s+remove\b",
    r"\bleave\s+.*\s+alone\b",
    r"\bmust\s+stay\b",
    r"\bprotect\b",
)

_SUCCESS = _compile(
    r"\bshould\s+(?:look|be|have|contain|produce|output|result)\b",
    r"\bexpect(?:ed)?\s+(?:output|result|outcome)\b",
    r"\bacceptance\s+criter\b",
    r"\bdone\s+when\b",
    r"\bsuccess\s+(?:looks|means|is)\b",
    r"\bverif(?:y|ied)\b",
    r"\btest\s+(?:that|by|with)\b",
)

_REVIEW = _compile(
    r"\breview\b",
    r"\bapprov(?:e|al)\b",
    r"\bdiff\s+(?:each|per|before)\b",
    r"\bone\s+(?:at\s+a\s+time|by\s+one)\b",
    r"\bper[- ]repo\b",
    r"\bindividually\b",
    r"\bdry[- ]?run\b",
)

_ROLLBACK = _compile(
    r"\bundo\b",
    r"\brevert\b",
    r"\brollback\b",
    r"\broll\s+back\b",
    r"\bbackup\b",
    r"\bback\s+up\b",
    r"\brestore\b",
    r"\bdry[- ]?run\b",
    r"\bgit\s+stash\b",
)

_EXCLUSION = _compile(
    r"\bexcept\b",
    r"\bexclud(?:e|ing)\b",
    r"\bbut\s+not\b",
    r"\bskip\b",
    r"\bignor(?:e|ing)\b",
    r"\bunless\b",
    r"\bnot\s+including\b",
)

_IDENTITY = _compile(
    r"\bvoice\b",
    r"\btone\b",
    r"\bstyle\b",
    r"\bpersonality\b",
    r"\bbranding\b",
    r"\bmatch\s+(?:the|existing|current)\b",
    r"\bsound\s+like\b",
    r"\bkeep\s+the\s+(?:same|existing)\b",
)


def _matches_any(text: str, patterns: tuple[re.Pattern[str], ...]) -> bool:
    return any(p.search(text) for p in patterns)


def _detect_actions(lower: str) -> list[str]:
    found: dict[str, None] = {}
    for pattern in _ACTION_PATTERNS:
        match = pattern.search(lower)
        if match:
            found.setdefault(match.group(0).lower())
    return list(found)


def _detect_scope(lower: str) -> list[str]:
    return [m.group(0).strip() for p in _SCOPE_PATTERNS if (m := p.search(lower))]


def _first_broad_quantifier(lower: str) -> str | None:
    for pattern in _BROAD_QUANTIFIERS:
        match = pattern.search(lower)
        if match:
            return match.group(0).strip()
    return None


def _first_of(found: list[str], targets: tuple[str, ...]) -> str | None:
    return next((word for word in found if word in targets), None)


def analyze(text: str) -> Result:
    """Detect missing constraint classes in a directive."""
    lower = text.lower()
    actions = _detect_actions(lower)
    scope = _detect_scope(lower)
    destructive = _first_of(actions, DESTRUCTIVE_VERBS)
    content = _first_of(actions, CONTENT_VERBS)
    broad = _first_broad_quantifier(lower)

    gaps: list[Gap] = []

    if destructive is not None and not _matches_any(lower, _PRESERVATION):
        gaps.append(Gap(
            GapClass.PRESERVATION,
            destructive,
            "Destructive action without preservation constraints",
            "What must NOT change? Name specific files, sections, or properties to protect.",
        ))

    if actions and not _matches_any(lower, _SUCCESS):
        gaps.append(Gap(
            GapClass.SUCCESS,
            actions[0],
            "Action without success criteria",
            "What does 'done' look like? Describe the expected outcome or acceptance test.",
        ))

    if scope and not _matches_any(lower, _REVIEW):
        gaps.append(Gap(
            GapClass.REVIEW,
            ", ".join(scope),
            "Multiple targets without review process",
            "Will you review each target before applying, or apply all at once?",
        ))

    if destructive is not None and scope and not _matches_any(lower, _ROLLBACK):
        gaps.append(Gap(
            GapClass.ROLLBACK,
            destructive,
            "Destructive scope without rollback plan",
            "How do you undo this if it goes wrong? Is there a backup or dry-run option?",
        ))

    if broad is not None and not _matches_any(lower, _EXCLUSION):
        gaps.append(Gap(
            GapClass.SCOPE_BOUNDARY,
            broad,
            "Broad scope without exclusions or boundaries",
            "Does 'all' really mean all? List any exceptions or directories to skip.",
        ))

    if content is not None and not _matches_any(lower, _IDENTITY):
        gaps.append(Gap(
            GapClass.IDENTITY,
            content,
            "Content modification without voice or style constraints",
            "What should the result sound like? Preserve existing voice, match a reference, "
            "or rewrite freely?",
        ))

    return Result(gaps=gaps, action_signals=len(actions), scope_signals=len(scope))
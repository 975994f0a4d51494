"""Operator scope declarations and their cross-check against directive text."""

from __future__ import annotations

import re
from dataclasses import dataclass, field

_FLAGS = re.IGNORECASE | re.ASCII


@dataclass
class Declaration:
    """An operator's explicit statement of what a directive will touch."""

    repos: int = 0
    files: int = 0
    targets: list[str] = field(default_factory=list)
    operation: str = ""

    def empty(self) -> bool:
        """True when nothing has been declared."""
        return not (self.repos or self.files or self.targets or self.operation)


@dataclass(frozen=True)
class Mismatch:
    """A gap between the declared scope and the directive text."""

    type: str
    declared: str
    detected: str
    description: str


@dataclass
class Result:
    """Outcome of cross-referencing a declaration with a directive."""

    declaration: Declaration
    mismatches: list[Mismatch] = field(default_factory=list)

    def clean(self) -> bool:
        """True when no mismatches were found."""
        return not self.mismatches


_NUMBER = re.compile(r"\d+", re.ASCII)

_PER_REPO = tuple(
    re.compile(p, _FLAGS)
    for p in (
        r"\bper[- ]repo\b",
        r"\beach\s+repo\b",
        r"\bindividually\b",
        r"\bone\s+(?:at\s+a\s+time|by\s+one)\b",
        r"\breview\s+(?:each|every)\b",
        r"\bdiff\s+(?:each|per|before)\b",
    )
)

_PRESERVATION = tuple(
    re.compile(p, _FLAGS)
    for p in (
        r"\bpreserve\b",
        r"\bkeep\b",
        r"\bdon'?t\s+change\b",
        r"\bdo\s+not\s+change\b",
        r"\bprotect\b",
    )
)

_DESTRUCTIVE_OPS = frozenset({
    "cleanup", "clean up", "delete", "remove", "rewrite", "replace",
    "overwrite", "migration", "refactor", "restructure",
})

_OPERATION_VERBS = re.compile(
    r"\b(clean|delete|remove|rewrite|replace|overwrite|update|refactor|migrate|restructure)\b",
    _FLAGS,
)

_OPERATION_SYNONYMS = {
    "cleanup": ("clean", "tidy", "organize"),
    "clean up": ("clean", "tidy", "organize"),
    "migration": ("migrate", "move", "convert"),
    "refactor": ("refactor", "restructure", "simplify"),
    "restructure": ("restructure", "refactor", "reorganize"),
}


def _extract_number(value: str) -> int:
    match = _NUMBER.search(value)
    return int(match.group(0)) if match else 0


def parse(block: str) -> Declaration:
    """Read a declaration from "key: value" lines such as "scope: 18 repos"."""
    decl = Declaration()
    for raw in block.split("\n"):
        line = raw.strip()
        if not line or ":" not in line:
            continue
        key, _, value = line.partition(":")
        key = key.lower().strip()
        value = value.strip()
        if key == "scope":
            decl.repos = _extract_number(value)
        elif key == "files":
            decl.files = _extract_number(value)
        elif key == "operation":
            decl.operation = value
        elif key == "targets":
            decl.targets.extend(t.strip() for t in value.split(",") if t.strip())
    return decl


def _matches_any(text: str, patterns: tuple[re.Pattern[str], ...]) -> bool:
    return any(p.search(text) for p in patterns)


def _detect_operation_verbs(lower: str) -> list[str]:
    found = dict.fromkeys(m.group(0).lower() for m in _OPERATION_VERBS.finditer(lower))
    return list(found)


def _verb_matches_operation(operation: str, verbs: list[str]) -> bool:
    op = operation.lower()
    if any(v in op or op in v for v in verbs):
        return True
    synonyms = _OPERATION_SYNONYMS.get(op, ())
    return any(v in synonyms for v in verbs)


def cross_reference(decl: Declaration, text: str) -> Result:
    """Check a declaration against directive text and report mismatches."""
    if decl.empty():
        return Result(declaration=decl)

    lower = text.lower()
    mismatches: list[Mismatch] = []

    if decl.repos > 1 and not _matches_any(lower, _PER_REPO):
        mismatches.append(Mismatch(
            "scope_vs_constraints",
            f"{decl.repos} repos",
            "0 per-repo constraints",
            "Multiple repos declared but text has no per-repo review or constraints",
        ))

    if decl.operation.lower() in _DESTRUCTIVE_OPS and not _matches_any(lower, _PRESERVATION):
        mismatches.append(Mismatch(
            "operation_vs_preservation",
            f"operation: {decl.operation}",
            "no preservation clauses",
            "Destructive operation declared but text has no preservation constraints",
        ))

    if decl.operation:
        verbs = _detect_operation_verbs(lower)
        if verbs and not _verb_matches_operation(decl.operation, verbs):
            mismatches.append(Mismatch(
                "operation_vs_verbs",
                f"operation: {decl.operation}",
                "text uses: " + ", ".join(verbs),
                "Declared operation doesn't match verbs used in text",
            ))

    for target in decl.targets:
        if target.lower() not in lower:
            mismatches.append(Mismatch(
                "target_not_mentioned",
                f"target: {target}",
                "not found in text",
                f"Declared target '{target}' not mentioned in directive",
            ))

    return Result(declaration=decl, mismatches=mismatches)
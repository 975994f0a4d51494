"""Request and response types of the Oracul API."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _require_mapping(data: Any, name: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise TypeError(f"{name} expects a JSON object, got {type(data).__name__}")
    return data


def _str(data: Mapping[str, Any], key: str) -> str:
    return str(data.get(key) or "")


def _int(data: Mapping[str, Any], key: str) -> int:
    return int(data.get(key) or 0)


def _float(data: Mapping[str, Any], key: str) -> float:
    return float(data.get(key) or 0.0)


def _strings(data: Mapping[str, Any], key: str) -> list[str]:
    return [str(item) for item in data.get(key) or ()]


@dataclass
class CaseFiling:
    """A structured case for deliberation."""

    decision: str = ""
    context: str = ""
    constraints: list[str] = field(default_factory=list)
    alternatives: list[str] = field(default_factory=list)
    known_risks: list[str] = field(default_factory=list)
    success_criteria: str = ""
    evidence: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form, leaving out empty optional fields."""
        out: dict[str, Any] = {"decision": self.decision}
        optional = {
            "context": self.context,
            "constraints": list(self.constraints),
            "alternatives": list(self.alternatives),
            "known_risks": list(self.known_risks),
            "success_criteria": self.success_criteria,
            "evidence": list(self.evidence),
        }
        out.update({k: v for k, v in optional.items() if v})
        return out


@dataclass
class ConsultRequest:
    """Body of a consult or preflight call."""

    question: str
    filing: CaseFiling | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form; the filing is left out when absent."""
        out: dict[str, Any] = {"question": self.question}
        if self.filing is not None:
            out["filing"] = self.filing.to_dict()
        return out


@dataclass
class PreflightResult:
    """Validation result of a case before deliberation."""

    verdict: str = ""
    reason: str = ""
    tier: str = ""
    filing_quality: float = 0.0
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> PreflightResult:
        """Build from a decoded JSON object."""
        data = _require_mapping(data, cls.__name__)
        return cls(
            verdict=_str(data, "verdict"),
            reason=_str(data, "reason"),
            tier=_str(data, "tier"),
            filing_quality=_float(data, "filing_quality"),
            warnings=_strings(data, "warnings"),
        )


@dataclass
class AccountStatus:
    """Account tier, quota and reset time."""

    tier: str = ""
    submissions_today: int = 0
    daily_limit: int = 0
    resets_at: str = ""
    active: bool = False

    @classmethod
    def from_dict(cls, data: Any) -> AccountStatus:
        """Build from a decoded JSON object."""
        data = _require_mapping(data, cls.__name__)
        return cls(
            tier=_str(data, "tier"),
            submissions_today=_int(data, "submissions_today"),
            daily_limit=_int(data, "daily_limit"),
            resets_at=_str(data, "resets_at"),
            active=bool(data.get("active", False)),
        )


@dataclass
class PrecedentPrediction:
    """A prediction attached to a precedent case."""

    statement: str = ""
    probability: float = 0.0
    resolved: bool = False
    correct: bool | None = None
    actual_value: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> PrecedentPrediction:
        """Build from a decoded JSON object."""
        data = _require_mapping(data, cls.__name__)
        correct = data.get("correct")
        return cls(
            statement=_str(data, "statement"),
            probability=_float(data, "probability"),
            resolved=bool(data.get("resolved", False)),
            correct=None if correct is None else bool(correct),
            actual_value=_str(data, "actual_value"),
        )


@dataclass
class PrecedentResult:
    """A single precedent case returned by a search."""

    case_id: str = ""
    question: str = ""
    verdict_status: str = ""
    confidence: float = 0.0
    created_at: str = ""
    similarity_score: float = 0.0
    predictions: list[PrecedentPrediction] = field(default_factory=list)
    outcome_count: int = 0
    outcome_correct_rate: float = 0.0
    claim_families: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> PrecedentResult:
        """Build from a decoded JSON object."""
        data = _require_mapping(data, cls.__name__)
        return cls(
            case_id=_str(data, "case_id"),
            question=_str(data, "question"),
            verdict_status=_str(data, "verdict_status"),
            confidence=_float(data, "confidence"),
            created_at=_str(data, "created_at"),
            similarity_score=_float(data, "similarity_score"),
            predictions=[
                PrecedentPrediction.from_dict(p) for p in data.get("predictions") or ()
            ],
            outcome_count=_int(data, "outcome_count"),
            outcome_correct_rate=_float(data, "outcome_correct_rate"),
            claim_families=_strings(data, "claim_families"),
        )


@dataclass
class RefClassSummary:
    """Summary of the reference class behind a precedent search."""

    total_cases: int = 0
    resolved_cases: int = 0
    success_rate: float = 0.0
    top_claim_families: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> RefClassSummary:
        """Build from a decoded JSON object."""
        data = _require_mapping(data, cls.__name__)
        return cls(
            total_cases=_int(data, "total_cases"),
            resolved_cases=_int(data, "resolved_cases"),
            success_rate=_float(data, "success_rate"),
            top_claim_families=_strings(data, "top_claim_families"),
        )


@dataclass
class PrecedentSearch:
    """Response of a precedent search."""

    precedents: list[PrecedentResult] = field(default_factory=list)
    total_similar: int = 0
    ref_class_summary: RefClassSummary | None = None

    @classmethod
    def from_dict(cls, data: Any) -> PrecedentSearch:
        """Build from a decoded JSON object."""
        data = _require_mapping(data, cls.__name__)
        summary = data.get("reference_class_summary")
        return cls(
            precedents=[PrecedentResult.from_dict(p) for p in data.get("precedents") or ()],
            total_similar=_int(data, "total_similar_cases"),
            ref_class_summary=None if summary is None else RefClassSummary.from_dict(summary),
        )


@dataclass
class OutcomeRequest:
    """Body of an outcome report: success, failure or partial."""

    result: str
    note: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the wire form; an empty note is left out."""
        out: dict[str, Any] = {"result": self.result}
        if self.note:
            out["note"] = self.note
        return out


@dataclass
class OutcomeResponse:
    """Response of an outcome report."""

    case_id: str = ""
    status: str = ""
    message: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> OutcomeResponse:
        """Build from a decoded JSON object."""
        data = _require_mapping(data, cls.__name__)
        return cls(
            case_id=_str(data, "case_id"),
            status=_str(data, "status"),
            message=_str(data, "message"),
        )


@dataclass
class GateResult:
    """Decision of a preflight gate check."""

    allowed: bool
    verdict: str = ""
    tier: str = ""
    quality: float = 0.0
    warnings: list[str] = field(default_factory=list)
    reason: str = ""
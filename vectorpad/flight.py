"""Append-only flight log of launched vectors and pattern statistics over it."""

from __future__ import annotations

import json
import os
import re
import secrets
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from datetime import datetime
from pathlib import Path
from typing import Any

REJECTED = "REJECTED"
TOP_N = 5
MAX_LINE_BYTES = 1024 * 1024

_FRACTION = re.compile(r"\.(\d+)")


def generate_id() -> str:
    """Return a random 16-character hex identifier for a flight record."""
    return secrets.token_hex(8)


def _format_time(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def _parse_time(value: Any) -> datetime | None:
    if value is None:
        return None
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    text = _FRACTION.sub(lambda m: "." + (m.group(1) + "000000")[:6], text, count=1)
    return datetime.fromisoformat(text)


def _strings(values: Iterable[Any] | None) -> list[str]:
    return [str(v) for v in values or ()]


@dataclass
class MetricsSnapshot:
    """Key metrics captured at launch time."""

    tokens: int = 0
    integrity: float = 0.0
    cpd: float = 0.0
    ttc: float = 0.0
    cdr: float = 0.0


def _metrics_to_dict(metrics: MetricsSnapshot) -> dict[str, Any]:
    return {
        "tokens": metrics.tokens,
        "integrity": metrics.integrity,
        "cpd": metrics.cpd,
        "ttc": metrics.ttc,
        "cdr": metrics.cdr,
    }


def _metrics_from_dict(data: Mapping[str, Any]) -> MetricsSnapshot:
    return MetricsSnapshot(
        tokens=int(data.get("tokens") or 0),
        integrity=float(data.get("integrity") or 0.0),
        cpd=float(data.get("cpd") or 0.0),
        ttc=float(data.get("ttc") or 0.0),
        cdr=float(data.get("cdr") or 0.0),
    )


@dataclass
class OraculSnapshot:
    """Oracul metadata attached to a flight record."""

    tier: str = ""
    filing_quality: float = 0.0
    preflight: str = ""
    warnings: list[str] = field(default_factory=list)
    precedent_count: int = 0


def _oracul_to_dict(snap: OraculSnapshot) -> dict[str, Any]:
    fields = {
        "tier": snap.tier,
        "filing_quality": snap.filing_quality,
        "preflight": snap.preflight,
        "warnings": list(snap.warnings),
        "precedent_count": snap.precedent_count,
    }
    return {k: v for k, v in fields.items() if v}


def _oracul_from_dict(data: Mapping[str, Any]) -> OraculSnapshot:
    return OraculSnapshot(
        tier=str(data.get("tier") or ""),
        filing_quality=float(data.get("filing_quality") or 0.0),
        preflight=str(data.get("preflight") or ""),
        warnings=_strings(data.get("warnings")),
        precedent_count=int(data.get("precedent_count") or 0),
    )


@dataclass
class Record:
    """A launched vector with its analysis snapshot."""

    id: str = ""
    launched: datetime | None = None
    target: str = ""
    text: str = ""
    metrics: MetricsSnapshot = field(default_factory=MetricsSnapshot)
    gaps: list[str] = field(default_factory=list)
    vague_verbs: list[str] = field(default_factory=list)
    outcome: str = ""
    note: str = ""
    oracul: OraculSnapshot | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; empty optional fields are left out."""
        out: dict[str, Any] = {
            "id": self.id,
            "launched": _format_time(self.launched),
            "target": self.target,
            "text": self.text,
            "metrics": _metrics_to_dict(self.metrics),
        }
        if self.gaps:
            out["gaps"] = list(self.gaps)
        if self.vague_verbs:
            out["vague_verbs"] = list(self.vague_verbs)
        if self.outcome:
            out["outcome"] = self.outcome
        if self.note:
            out["note"] = self.note
        if self.oracul is not None:
            out["oracul"] = _oracul_to_dict(self.oracul)
        return out

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Record:
        """Build a record from its decoded JSON form."""
        if not isinstance(data, Mapping):
            raise TypeError(f"Record expects a JSON object, got {type(data).__name__}")
        metrics = data.get("metrics") or {}
        oracul = data.get("oracul")
        return cls(
            id=str(data.get("id") or ""),
            launched=_parse_time(data.get("launched")),
            target=str(data.get("target") or ""),
            text=str(data.get("text") or ""),
            metrics=_metrics_from_dict(metrics),
            gaps=_strings(data.get("gaps")),
            vague_verbs=_strings(data.get("vague_verbs")),
            outcome=str(data.get("outcome") or ""),
            note=str(data.get("note") or ""),
            oracul=None if oracul is None else _oracul_from_dict(oracul),
        )


@dataclass(frozen=True)
class GapFrequency:
    """How often a class (gap or warning) appears."""

    class_name: str
    count: int


@dataclass
class OraculStats:
    """Aggregate analysis of Oracul submissions."""

    total_submits: int = 0
    avg_filing_quality: float = 0.0
    rejection_rate: float = 0.0
    top_warnings: list[GapFrequency] = field(default_factory=list)


@dataclass
class Stats:
    """Aggregate pattern analysis of the flight log."""

    total_launches: int = 0
    annotated: int = 0
    outcome_counts: dict[str, int] = field(default_factory=dict)
    avg_cdr_by_outcome: dict[str, float] = field(default_factory=dict)
    top_gaps: list[GapFrequency] = field(default_factory=list)
    oracul: OraculStats | None = None


def _top(counter: Counter[str]) -> list[GapFrequency]:
    ranked = sorted(counter.items(), key=lambda item: -item[1])
    return [GapFrequency(name, count) for name, count in ranked[:TOP_N]]


def _encode(record: Record) -> str:
    return json.dumps(record.to_dict(), ensure_ascii=False, separators=(",", ":"))


class Recorder:
    """Reads and writes the append-only flight log at a given path."""

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    @classmethod
    def default(cls) -> Recorder:
        """Return a recorder at ~/.vectorpad/flight/log.jsonl, creating the directory."""
        directory = Path.home() / ".vectorpad" / "flight"
        directory.mkdir(mode=0o700, parents=True, exist_ok=True)
        return cls(directory / "log.jsonl")

    def append(self, record: Record) -> Record:
        """Write a record to the log, filling in its id and launch time; return it."""
        stored = replace(
            record,
            id=record.id or generate_id(),
            launched=record.launched or datetime.now().astimezone(),
        )
        line = _encode(stored) + "\n"
        fd = os.open(self.path, os.O_CREAT | os.O_WRONLY | os.O_APPEND, 0o600)
        with open(fd, "a", encoding="utf-8") as handle:
            handle.write(line)
        return stored

    def update_oracul(self, record_id: str, snapshot: OraculSnapshot | None) -> None:
        """Attach Oracul metadata to the record with the given id."""
        records = self._load_all()
        for record in records:
            if record.id == record_id:
                record.oracul = snapshot
                self._write_all(records)
                return
        raise LookupError(f"record {record_id} not found")

    def annotate(self, record_id: str, outcome: str, note: str) -> None:
        """Set the outcome and note of the record with the given id."""
        records = self._load_all()
        for record in records:
            if record.id == record_id:
                record.outcome = outcome
                record.note = note
                self._write_all(records)
                return
        raise LookupError(f"record {record_id} not found")

    def recent(self, n: int) -> list[Record]:
        """Return up to n records, newest first; all of them when n <= 0."""
        records = self._load_all()
        records.reverse()
        if n > 0:
            records = records[:n]
        return records

    def compute_stats(self) -> Stats:
        """Analyse the log for outcome, gap and Oracul patterns."""
        records = self._load_all()
        stats = Stats(total_launches=len(records))

        outcomes: Counter[str] = Counter()
        cdr_sums: dict[str, float] = {}
        gaps: Counter[str] = Counter()
        for record in records:
            if record.outcome:
                outcomes[record.outcome] += 1
                cdr_sums[record.outcome] = cdr_sums.get(record.outcome, 0.0) + record.metrics.cdr
            gaps.update(record.gaps)

        stats.annotated = sum(outcomes.values())
        stats.outcome_counts = dict(outcomes)
        stats.avg_cdr_by_outcome = {
            outcome: total / outcomes[outcome] for outcome, total in cdr_sums.items()
        }
        stats.top_gaps = _top(gaps)

        snapshots = [r.oracul for r in records if r.oracul is not None]
        if snapshots:
            qualities = [s.filing_quality for s in snapshots if s.filing_quality > 0]
            rejections = sum(1 for s in snapshots if s.preflight == REJECTED)
            warnings: Counter[str] = Counter()
            for snap in snapshots:
                warnings.update(snap.warnings)
            stats.oracul = OraculStats(
                total_submits=len(snapshots),
                avg_filing_quality=sum(qualities) / len(qualities) if qualities else 0.0,
                rejection_rate=rejections / len(snapshots),
                top_warnings=_top(warnings),
            )
        return stats

    def _load_all(self) -> list[Record]:
        try:
            handle = open(self.path, "rb")
        except FileNotFoundError:
            return []
        records: list[Record] = []
        with handle:
            for raw in handle:
                line = raw.rstrip(b"\n")
                if line.endswith(b"\r"):
                    line = line[:-1]
                if len(line) > MAX_LINE_BYTES:
                    raise ValueError(f"flight log line exceeds {MAX_LINE_BYTES} bytes")
                if not line:
                    continue
                try:
                    records.append(Record.from_dict(json.loads(line)))
                except (ValueError, TypeError, AttributeError):
                    continue
        return records

    def _write_all(self, records: Iterable[Record]) -> None:
        tmp = self.path.with_name(self.path.name + ".tmp")
        try:
            with open(tmp, "w", encoding="utf-8") as handle:
                for record in records:
                    handle.write(_encode(record) + "\n")
        except BaseException:
            tmp.unlink(missing_ok=True)
            raise
        os.replace(tmp, self.path)
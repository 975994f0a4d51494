import pytest

from vectorpad.oracul_types import (
    AccountStatus,
    CaseFiling,
    ConsultRequest,
    OutcomeRequest,
    OutcomeResponse,
    PrecedentPrediction,
    PrecedentSearch,
    PreflightResult,
)


def test_case_filing_omits_empty_fields():
    filing = CaseFiling(decision="Use Kafka")
    assert filing.to_dict() == {"decision": "Use Kafka"}


def test_case_filing_includes_set_fields():
    filing = CaseFiling(
        decision="Use Kafka for messaging",
        constraints=["Must handle 10k msg/s"],
        known_risks=["Kafka might be overkill for this."],
    )
    data = filing.to_dict()
    assert data["constraints"] == ["Must handle 10k msg/s"]
    assert data["known_risks"] == ["Kafka might be overkill for this."]
    assert "context" not in data
    assert "alternatives" not in data


def test_consult_request_filing_optional():
    assert ConsultRequest(question="test").to_dict() == {"question": "test"}
    request = ConsultRequest(question="q", filing=CaseFiling(decision="d"))
    assert request.to_dict()["filing"] == {"decision": "d"}


def test_preflight_result_from_dict():
    result = PreflightResult.from_dict({
        "verdict": "ACCEPTED",
        "tier": "standard",
        "filing_quality": 0.85,
        "warnings": ["no success criteria"],
    })
    assert result.verdict == "ACCEPTED"
    assert result.filing_quality == 0.85
    assert result.warnings == ["no success criteria"]
    assert result.reason == ""


def test_account_status_from_dict():
    status = AccountStatus.from_dict({
        "tier": "standard",
        "submissions_today": 7,
        "daily_limit": 15,
        "resets_at": "2026-03-11T00:00:00Z",
        "active": True,
    })
    assert status.submissions_today == 7
    assert status.daily_limit == 15
    assert status.active is True


def test_precedent_search_from_dict():
    search = PrecedentSearch.from_dict({
        "precedents": [
            {
                "case_id": "case-001",
                "similarity_score": 0.72,
                "predictions": [
                    {"statement": "ops burden < 10h/month", "probability": 0.8,
                     "resolved": True, "correct": True},
                ],
            },
            {"case_id": "case-002", "similarity_score": 0.58},
        ],
        "total_similar_cases": 12,
        "reference_class_summary": {"total_cases": 12, "resolved_cases": 8,
                                    "success_rate": 0.625},
    })
    assert len(search.precedents) == 2
    assert search.total_similar == 12
    assert search.ref_class_summary is not None
    assert search.ref_class_summary.success_rate == 0.625
    assert search.precedents[0].predictions[0].correct is True
    assert search.precedents[1].predictions == []


def test_precedent_search_without_summary():
    search = PrecedentSearch.from_dict({"precedents": [], "total_similar_cases": 0})
    assert search.ref_class_summary is None
    assert search.precedents == []


def test_prediction_correct_absent_is_none():
    prediction = PrecedentPrediction.from_dict({"statement": "s", "resolved": False})
    assert prediction.correct is None
    assert prediction.statement == "s"


def test_outcome_request_and_response():
    assert OutcomeRequest(result="success").to_dict() == {"result": "success"}
    assert OutcomeRequest(result="partial", note="n").to_dict() == {
        "result": "partial", "note": "n",
    }
    response = OutcomeResponse.from_dict({"case_id": "case-001", "status": "recorded"})
    assert response.case_id == "case-001"
    assert response.message == ""


def test_from_dict_rejects_non_object():
    with pytest.raises(TypeError):
        PreflightResult.from_dict(["ACCEPTED"])
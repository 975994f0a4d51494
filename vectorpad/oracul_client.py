"""HTTP client for the Oracul API."""

from __future__ import annotations

import json
import urllib.error
import urllib.parse
import urllib.request
from collections.abc import Callable
from http import HTTPStatus
from typing import Any, TypeVar

from vectorpad.oracul_types import (
    AccountStatus,
    CaseFiling,
    ConsultRequest,
    GateResult,
    OutcomeRequest,
    OutcomeResponse,
    PrecedentSearch,
    PreflightResult,
)

CONSULT_TIMEOUT = 480.0
PREFLIGHT_TIMEOUT = 10.0
ACCOUNT_TIMEOUT = 5.0
PRECEDENT_TIMEOUT = 10.0
OUTCOME_TIMEOUT = 10.0
AUTH_HEADER = "X-Oracul-Key"

_T = TypeVar("_T")


class APIError(Exception):
    """A non-200 response from the Oracul API."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(f"oracul API {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _parse_api_error(status_code: int, body: bytes) -> APIError:
    try:
        data = json.loads(body)
    except ValueError:
        data = None
    if isinstance(data, dict):
        message = data.get("error")
        if isinstance(message, str) and message:
            return APIError(status_code, message)

    if status_code == HTTPStatus.UNAUTHORIZED:
        message = "invalid or missing API key"
    elif status_code == HTTPStatus.TOO_MANY_REQUESTS:
        message = "rate limited"
    else:
        try:
            message = HTTPStatus(status_code).phrase
        except ValueError:
            message = ""
    return APIError(status_code, message)


def _decode(body: bytes, what: str, factory: Callable[[Any], _T]) -> _T:
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise ValueError(f"parse {what} response: {exc}") from exc
    return factory({} if data is None else data)


class OraculClient:
    """Client for the consult, preflight, account, precedent and outcome endpoints."""

    def __init__(self, endpoint: str, api_key: str = "") -> None:
        self.endpoint = endpoint
        self.api_key = api_key
        self._opener = urllib.request.build_opener()

    def _send(self, method: str, path: str, payload: Any, timeout: float) -> bytes:
        headers: dict[str, str] = {}
        data = None
        if payload is not None:
            data = json.dumps(payload).encode("utf-8")
            headers["Content-Type"] = "application/json"
        if self.api_key:
            headers[AUTH_HEADER] = self.api_key

        request = urllib.request.Request(
            self.endpoint + path, data=data, headers=headers, method=method
        )
        try:
            with self._opener.open(request, timeout=timeout) as response:
                status = response.status
                body = response.read()
        except urllib.error.HTTPError as exc:
            with exc:
                body = exc.read()
            raise _parse_api_error(exc.code, body) from None

        if status != HTTPStatus.OK:
            raise _parse_api_error(status, body)
        return body

    def consult(self, request: ConsultRequest) -> bytes:
        """Send a case for deliberation and return the raw JSON response body."""
        return self._send("POST", "/v1/consult", request.to_dict(), CONSULT_TIMEOUT)

    def preflight(self, question: str, filing: CaseFiling | None) -> PreflightResult:
        """Validate a case without starting deliberation."""
        payload = ConsultRequest(question=question, filing=filing).to_dict()
        body = self._send("POST", "/v1/preflight", payload, PREFLIGHT_TIMEOUT)
        return _decode(body, "preflight", PreflightResult.from_dict)

    def preflight_gate(self, question: str, filing: CaseFiling | None) -> GateResult:
        """Run a preflight and turn its verdict into a gate decision."""
        result = self.preflight(question, filing)
        return GateResult(
            allowed=result.verdict == "ACCEPTED",
            verdict=result.verdict,
            tier=result.tier,
            quality=result.filing_quality,
            warnings=list(result.warnings),
            reason=result.reason,
        )

    def account(self) -> AccountStatus:
        """Fetch the account tier, quota and reset time."""
        body = self._send("GET", "/v1/account", None, ACCOUNT_TIMEOUT)
        return _decode(body, "account", AccountStatus.from_dict)

    def search_precedents(self, question: str, limit: int) -> PrecedentSearch:
        """Search for similar past decisions."""
        path = (
            "/v1/precedents/search?q="
            + urllib.parse.quote_plus(question)
            + "&limit="
            + str(int(limit))
        )
        body = self._send("GET", path, None, PRECEDENT_TIMEOUT)
        return _decode(body, "precedent", PrecedentSearch.from_dict)

    def report_outcome(self, case_id: str, request: OutcomeRequest) -> OutcomeResponse:
        """Submit the outcome of a previously decided case."""
        path = f"/v1/cases/{case_id}/outcome"
        body = self._send("POST", path, request.to_dict(), OUTCOME_TIMEOUT)
        return _decode(body, "outcome", OutcomeResponse.from_dict)
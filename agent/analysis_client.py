# File: agent/analysis_client.py
# HTTP client for the remote reaction-analysis service. One POST per call, no retries, no caching.

import logging
from typing import Any, Dict, Optional

import requests
from jsonschema import ValidationError, validate

from agent.config import DEFAULT_ANALYSIS_API_URL, Settings

logger = logging.getLogger(__name__)

# Top-level envelope only; the shape of "result" is the response parser's business.
RESPONSE_SCHEMA = {
    "type": "object",
    "required": ["result"],
    "properties": {
        "result": {"type": ["object", "string"]},
    },
}


class BackendError(RuntimeError):
    def __init__(self, message: str, status_code: Optional[int] = None, raw: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.raw = raw


class AnalysisClient:
    def __init__(self, url: str = DEFAULT_ANALYSIS_API_URL, timeout: Optional[float] = None):
        self.url = url
        self.timeout = timeout

    @classmethod
    def from_settings(cls, s: Settings) -> "AnalysisClient":
        return cls(s.analysis_api_url, s.analysis_timeout_seconds)

    def query(self, chem1: str, chem2: str) -> Dict[str, Any]:
        """
        Send both raw inputs (exactly as typed) and return the decoded response envelope.
        Raises BackendError on transport failure, non-2xx status, a body that is not a
        {"result": ...} object, or an "error" field in an otherwise successful response.
        """
        logger.debug("POST %s chem1=%r chem2=%r", self.url, chem1, chem2)
        try:
            r = requests.post(
                self.url,
                headers={"Content-Type": "application/json"},
                json={"chem1": chem1, "chem2": chem2},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise BackendError(f"Could not reach analysis service: {e}") from e

        if not 200 <= r.status_code < 300:
            raise BackendError(f"Backend Error: {r.status_code} {r.reason}", status_code=r.status_code, raw=r.text)

        try:
            data = r.json()
        except ValueError as e:
            raise BackendError("Analysis service returned a non-JSON body", status_code=r.status_code,
                               raw=r.text) from e

        if isinstance(data, dict) and data.get("error"):
            raise BackendError(str(data["error"]), status_code=r.status_code, raw=r.text)

        try:
            validate(instance=data, schema=RESPONSE_SCHEMA)
        except ValidationError as e:
            raise BackendError(f"Malformed analysis response: {e.message}", status_code=r.status_code,
                               raw=r.text) from e

        return data

"""MobSF REST client: upload, scan trigger and JSON report fetch."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
from pydantic import ValidationError

from mobsf_mcp.errors import BackendError
from mobsf_mcp.models import PlatformKind, RawReport, UploadResult

logger = logging.getLogger(__name__)

UPLOAD_PATH = "/api/v1/upload"
SCAN_PATH = "/api/v1/scan"
REPORT_JSON_PATH = "/api/v1/report_json"


def _compact_json(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)


def _error_body(response: httpx.Response) -> str:
    """Serialise a failed response body, falling back to the status line."""
    if not response.content:
        return f"Request failed with status code {response.status_code}"
    try:
        body = response.json()
    except ValueError:
        body = response.text
    return _compact_json(body)


class MobSFClient:
    """Async client for the three MobSF calls a scan needs.

    Upload is sent as multipart form data, scan and report_json as
    ``application/x-www-form-urlencoded``; MobSF dispatches on content type.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._transport = transport

    def _headers(self) -> dict[str, str]:
        headers: dict[str, str] = {}
        if self.api_key:
            headers["Authorization"] = self.api_key
        return headers

    async def _post(
        self,
        path: str,
        *,
        data: dict[str, str] | None = None,
        files: dict[str, Any] | None = None,
    ) -> httpx.Response:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                resp = await client.post(url, data=data, files=files, headers=self._headers())
                resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.error("MobSF returned HTTP %s for %s", exc.response.status_code, path)
            raise BackendError(
                _error_body(exc.response),
                status_code=exc.response.status_code,
                endpoint=path,
            ) from exc
        except httpx.HTTPError as exc:
            logger.error("HTTP error calling MobSF %s: %s", path, exc)
            raise BackendError(str(exc) or type(exc).__name__, endpoint=path) from exc
        return resp

    @staticmethod
    def _json_object(resp: httpx.Response, path: str) -> dict[str, Any]:
        try:
            payload = resp.json()
        except ValueError as exc:
            raise BackendError(
                f"Malformed response from {path}: body is not JSON",
                status_code=resp.status_code,
                endpoint=path,
            ) from exc
        if not isinstance(payload, dict):
            raise BackendError(
                f"Malformed response from {path}: expected a JSON object",
                status_code=resp.status_code,
                endpoint=path,
            )
        return payload

    async def upload(self, file: str | Path) -> UploadResult:
        """Upload a binary; returns the hash and stored file name."""
        path = Path(file)
        try:
            with path.open("rb") as fh:
                resp = await self._post(UPLOAD_PATH, files={"file": (path.name, fh)})
        except (OSError, ValueError) as exc:
            # ValueError: unopenable path such as one with an embedded NUL
            raise BackendError(str(exc), endpoint=UPLOAD_PATH) from exc

        payload = self._json_object(resp, UPLOAD_PATH)
        try:
            return UploadResult.model_validate(payload)
        except ValidationError as exc:
            raise BackendError(
                f"Malformed response from {UPLOAD_PATH}: {_compact_json(payload)}",
                status_code=resp.status_code,
                endpoint=UPLOAD_PATH,
            ) from exc

    async def scan(self, hash: str, scan_type: PlatformKind, file_name: str) -> None:
        """Trigger analysis of an uploaded binary. The response body is ignored."""
        await self._post(
            SCAN_PATH,
            data={"hash": hash, "scan_type": str(scan_type), "file_name": file_name},
        )

    async def report_json(self, hash: str) -> RawReport:
        """Fetch the full JSON report for a scanned binary."""
        resp = await self._post(REPORT_JSON_PATH, data={"hash": hash})
        return self._json_object(resp, REPORT_JSON_PATH)

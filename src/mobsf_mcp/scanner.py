"""Scan orchestration: classify, upload, trigger, fetch report, summarize.

The stages run strictly in order with no retries. Any failure ends the
scan with an error tool result; no partial data is returned.
"""

from __future__ import annotations

import json
import logging
from enum import StrEnum

from mobsf_mcp.backend import MobSFClient
from mobsf_mcp.diagnostic_log import DiagnosticSink
from mobsf_mcp.errors import BackendError, UnsupportedFileTypeError
from mobsf_mcp.logging_config import bind_scan_context, clear_scan_context
from mobsf_mcp.models import PlatformKind, RawReport, ToolResult, UploadResult
from mobsf_mcp.summarizer import summarize

logger = logging.getLogger(__name__)


class ScanStage(StrEnum):
    CLASSIFY = "classify"
    UPLOAD = "upload"
    TRIGGER = "trigger"
    FETCH_REPORT = "fetch_report"
    SUMMARIZE = "summarize"


class ScanOrchestrator:
    """Runs one ``scanFile`` invocation against a MobSF backend."""

    def __init__(self, client: MobSFClient, log: DiagnosticSink) -> None:
        self._client = client
        self._log = log

    async def scan_file(self, file: str) -> ToolResult:
        """Scan *file* and return the summary, or an error result."""
        stage = ScanStage.CLASSIFY
        bind_scan_context(file, stage=stage)
        try:
            platform = PlatformKind.from_path(file)
            if platform is None:
                raise UnsupportedFileTypeError(file)

            stage = ScanStage.UPLOAD
            bind_scan_context(file, scan_type=platform, stage=stage)
            self._log.append(f"Uploading file: {file}")
            upload: UploadResult = await self._client.upload(file)
            self._log.append(
                f"Uploaded successfully. Hash: {upload.hash}, File: {upload.file_name}"
            )

            stage = ScanStage.TRIGGER
            bind_scan_context(file, scan_type=platform, stage=stage)
            await self._client.scan(upload.hash, platform, upload.file_name)

            stage = ScanStage.FETCH_REPORT
            bind_scan_context(file, scan_type=platform, stage=stage)
            report: RawReport = await self._client.report_json(upload.hash)

            stage = ScanStage.SUMMARIZE
            bind_scan_context(file, scan_type=platform, stage=stage)
            summary = summarize(report, platform)
            return ToolResult.text(json.dumps(summary.to_dict(), indent=2, ensure_ascii=False))
        except UnsupportedFileTypeError as exc:
            logger.info("Scan rejected at stage %s: %s %s", stage, exc.code, exc.details)
            return ToolResult.error(exc.tool_text())
        except BackendError as exc:
            logger.warning(
                "Scan stopped at stage %s: %s %s %s", stage, exc.code, exc.details, exc.message
            )
            self._log.append(f"MobSF error: {exc.message}")
            return ToolResult.error(exc.tool_text())
        finally:
            clear_scan_context()

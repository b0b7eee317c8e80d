"""Pydantic models for scan requests, backend payloads and tool results."""

from enum import StrEnum
from pathlib import PurePath
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

# Backend-defined report; shape depends on the platform.
RawReport = dict[str, Any]


class PlatformKind(StrEnum):
    """Mobile platform of a binary. The value is MobSF's ``scan_type``."""

    ANDROID = "apk"
    IOS = "ios"

    @classmethod
    def from_path(cls, path: str) -> "PlatformKind | None":
        """Classify by file extension, case-insensitively."""
        suffix = PurePath(path).suffix.lower()
        if suffix == ".apk":
            return cls.ANDROID
        if suffix == ".ipa":
            return cls.IOS
        return None


class ScanFileArgs(BaseModel):
    """Validated arguments of the ``scanFile`` tool."""

    model_config = ConfigDict(frozen=True)

    file: str


class UploadResult(BaseModel):
    """Response of ``POST /api/v1/upload``; ``hash`` keys every later call."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    hash: str
    file_name: str


# ─── Summaries ───────────────────────────────────
# Only keys present in the raw report are set, and dumps use exclude_unset,
# so absent report keys stay absent in the summary.


class _Summary(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", exclude_unset=True)


class AndroidFindings(_Summary):
    manifest_analysis: Any = None
    urls: Any = None
    domains: Any = None
    tracker_analysis: Any = None
    network_security: Any = None


class AndroidSummary(_Summary):
    app_name: Any = None
    package_name: Any = None
    version_name: Any = None
    permissions: Any = None
    exported_activities: Any = None
    services: Any = None
    receivers: Any = None
    providers: Any = None
    analysis_findings: AndroidFindings


class IosFindings(_Summary):
    binary_code_analysis: Any = None
    possible_hardcoded_secrets: Any = None
    binary_analysis: Any = None
    strings_analysis: Any = None
    keychain_analysis: Any = None


class IosSummary(_Summary):
    app_name: Any = None
    bundle_id: Any = None
    version: Any = None
    min_ios_version: Any = None
    platform: Any = None
    binary_archs: Any = None
    entitlements: Any = None
    url_schemes: Any = None
    analysis_findings: IosFindings


Summary = AndroidSummary | IosSummary


# ─── Tool results ────────────────────────────────


class ToolContent(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Envelope returned for every tool call, success or failure."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    is_error: bool = Field(False, alias="isError")
    content: list[ToolContent] = Field(default_factory=list)

    @classmethod
    def text(cls, text: str) -> "ToolResult":
        return cls(is_error=False, content=[ToolContent(text=text)])

    @classmethod
    def error(cls, text: str) -> "ToolResult":
        return cls(is_error=True, content=[ToolContent(text=text)])

    @property
    def first_text(self) -> str:
        return self.content[0].text if self.content else ""

    def to_dict(self) -> dict[str, Any]:
        """Wire shape: ``{"content": [...], "isError": bool}``."""
        return {
            "content": [c.model_dump() for c in self.content],
            "isError": self.is_error,
        }

"""Shared test fixtures."""

from __future__ import annotations

from typing import Any

import httpx
import pytest

from mobsf_mcp.backend import REPORT_JSON_PATH, SCAN_PATH, UPLOAD_PATH, MobSFClient
from mobsf_mcp.mcp.server import MCPServer
from mobsf_mcp.scanner import ScanOrchestrator

MOBSF_URL = "http://mobsf.test:8000"
API_KEY = "test-api-key"

ANDROID_REPORT: dict[str, Any] = {
    "app_name": "DemoApp",
    "package_name": "com.example.demo",
    "version_name": "2.4.1",
    "permissions": {
        "android.permission.INTERNET": {"status": "normal", "info": "full Internet access"},
        "android.permission.READ_SMS": {"status": "dangerous", "info": "read SMS or MMS"},
    },
    "exported_activities": ["com.example.demo.DeepLinkActivity"],
    "services": ["com.example.demo.SyncService"],
    "receivers": ["com.example.demo.BootReceiver"],
    "providers": [],
    "manifest_analysis": {"manifest_findings": [{"rule": "android_debuggable", "severity": "high"}]},
    "urls": [{"urls": ["http://api.example.com"], "path": "com/example/demo/Api.java"}],
    "domains": {"api.example.com": {"bad": "no"}},
    "tracker_analysis": {"detected_trackers": 1, "total_trackers": 400},
    "network_security": {"network_findings": []},
    # not part of the summary
    "code_analysis": {"findings": {"android_logging": {}}},
    "md5": "0f1e2d3c4b5a69788796a5b4c3d2e1f0",
    "target_sdk": "33",
}

IOS_REPORT: dict[str, Any] = {
    "app_name": "DemoiOS",
    "identifier": "com.example.demoios",
    "version": "5.0",
    "minimum_os": "14.0",
    "platform": "iPhoneOS",
    "archs": ["ARM64"],
    "entitlements": {"aps-environment": "production"},
    "url_schemes": ["demoios"],
    "binary_code_analysis": {"findings": {"ios_insecure_random": {"level": "high"}}},
    "possible_hardcoded_secrets": ["\"api_key\" : \"abc123\""],
    "binary_analysis": {"findings": []},
    "strings_analysis": ["NSAllowsArbitraryLoads"],
    "keychain_analysis": {"accessible": "kSecAttrAccessibleAlways"},
    # not part of the summary
    "urls": [{"urls": ["https://cdn.example.com"]}],
    "bundle_name": "DemoiOS",
}

UPLOAD_RESPONSE = {
    "hash": "3a552566097a8de588b8184b059b0158",
    "file_name": "demo.apk",
    "scan_type": "apk",
    "analyzer": "static_analyzer",
    "status": "success",
}


class MemoryLog:
    """Diagnostic sink that keeps messages in memory."""

    def __init__(self) -> None:
        self.messages: list[str] = []

    def append(self, message: str) -> None:
        self.messages.append(message)


class MobSFStub:
    """In-process MobSF backend served through ``httpx.MockTransport``.

    Each endpoint answers with a configured ``(status, body)``. A dict/list
    body is sent as JSON, a str as text, ``None`` as an empty body and an
    exception instance is raised as a transport failure.
    """

    def __init__(
        self,
        upload: tuple[int, Any] = (200, UPLOAD_RESPONSE),
        scan: tuple[int, Any] = (200, {"status": "ok"}),
        report: tuple[int, Any] = (200, ANDROID_REPORT),
    ) -> None:
        self.responses: dict[str, tuple[int, Any]] = {
            UPLOAD_PATH: upload,
            SCAN_PATH: scan,
            REPORT_JSON_PATH: report,
        }
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self.responses[request.url.path]
        if isinstance(body, Exception):
            raise body
        if body is None:
            return httpx.Response(status)
        if isinstance(body, str):
            return httpx.Response(status, text=body)
        return httpx.Response(status, json=body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls(self, path: str) -> int:
        return sum(1 for r in self.requests if r.url.path == path)

    def request_for(self, path: str) -> httpx.Request:
        return next(r for r in self.requests if r.url.path == path)


@pytest.fixture
def memory_log() -> MemoryLog:
    return MemoryLog()


@pytest.fixture
def stub() -> MobSFStub:
    return MobSFStub()


@pytest.fixture
def client(stub: MobSFStub) -> MobSFClient:
    return MobSFClient(base_url=MOBSF_URL, api_key=API_KEY, transport=stub.transport)


@pytest.fixture
def orchestrator(client: MobSFClient, memory_log: MemoryLog) -> ScanOrchestrator:
    return ScanOrchestrator(client, memory_log)


@pytest.fixture
def mcp_server(orchestrator: ScanOrchestrator, memory_log: MemoryLog) -> MCPServer:
    return MCPServer(orchestrator, memory_log)


@pytest.fixture
def apk_file(tmp_path):
    path = tmp_path / "demo.apk"
    path.write_bytes(b"PK\x03\x04fake-apk-bytes")
    return path


@pytest.fixture
def ipa_file(tmp_path):
    path = tmp_path / "Demo.IPA"
    path.write_bytes(b"PK\x03\x04fake-ipa-bytes")
    return path

"""MCP protocol adapter exposing MobSF scanning as a tool.

Thin adapter: validates tool calls and hands them to the scan orchestrator.
Every outcome, including failures, is returned as a ``ToolResult``.
"""

import logging
from typing import Any

from mobsf_mcp import __version__
from mobsf_mcp.diagnostic_log import DiagnosticSink
from mobsf_mcp.errors import InvalidArgumentsError, UnknownToolError
from mobsf_mcp.models import ToolResult
from mobsf_mcp.scanner import ScanOrchestrator

from .tools import SCAN_FILE_TOOL, ArgsInvalid, tool_definitions, validate_scan_file_args

logger = logging.getLogger(__name__)

PROTOCOL_VERSION = "2024-11-05"
SERVER_NAME = "mobsf"
INSTRUCTIONS = "This tool allows MobSF scanning (APK/IPA) via Claude using MCP."
CAPABILITIES = {"tools": {"listChanged": True}}


class MCPServer:
    """Model Context Protocol server for MobSF.

    Holds no per-request state; each tool call runs its own scan.
    """

    def __init__(self, orchestrator: ScanOrchestrator, log: DiagnosticSink) -> None:
        self._orchestrator = orchestrator
        self._log = log
        self._tools = tool_definitions()

    def initialize(self) -> dict[str, Any]:
        """Answer the ``initialize`` handshake."""
        self._log.append("Received initialize request")
        return {
            "protocolVersion": PROTOCOL_VERSION,
            "capabilities": {"tools": dict(CAPABILITIES["tools"])},
            "serverInfo": {"name": SERVER_NAME, "version": __version__},
            "instructions": INSTRUCTIONS,
        }

    def list_tools(self) -> list[dict]:
        """Return available tool definitions."""
        self._log.append("Received list tools request")
        return tool_definitions()

    async def call_tool(self, tool_name: str, arguments: Any) -> ToolResult:
        """Dispatch a tool call to the scan orchestrator."""
        self._log.append(f"Tool call received: {tool_name}")
        if tool_name != SCAN_FILE_TOOL:
            err = UnknownToolError(tool_name)
            logger.info("Rejected %s call: %s", tool_name, err.code)
            return ToolResult.error(err.tool_text())

        parsed = validate_scan_file_args(arguments)
        if isinstance(parsed, ArgsInvalid):
            err = InvalidArgumentsError(tool_name, parsed.errors)
            logger.info("Rejected %s call: %s %s", tool_name, err.code, "; ".join(err.details))
            return ToolResult.error(err.tool_text())

        return await self._orchestrator.scan_file(parsed.args.file)

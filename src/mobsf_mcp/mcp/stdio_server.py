"""MCP stdio server wrapping MobSF for Claude Desktop and other MCP clients.

Reads JSON-RPC 2.0 messages from stdin, dispatches them to MCPServer and
writes responses to stdout. Logs go to stderr and the diagnostic log file.

Usage:
    python -m mobsf_mcp --mobsf-url http://localhost:8000 --api-key <key>
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import IO, Any

from mobsf_mcp.backend import MobSFClient
from mobsf_mcp.config import Settings
from mobsf_mcp.diagnostic_log import DiagnosticLog, DiagnosticSink
from mobsf_mcp.logging_config import configure_logging
from mobsf_mcp.mcp.server import MCPServer
from mobsf_mcp.scanner import ScanOrchestrator

logger = logging.getLogger(__name__)


class MobSFMCPStdioServer:
    """JSON-RPC 2.0 stdio transport for the MobSF MCP server."""

    def __init__(
        self,
        settings: Settings | None = None,
        log: DiagnosticSink | None = None,
        client: MobSFClient | None = None,
        stdin: IO[str] | None = None,
        stdout: IO[str] | None = None,
    ) -> None:
        settings = settings or Settings()
        self._log = log or DiagnosticLog(settings.log_file)
        client = client or MobSFClient(
            base_url=settings.base_url,
            api_key=settings.api_key,
            timeout=settings.request_timeout,
        )
        self._mcp = MCPServer(ScanOrchestrator(client, self._log), self._log)
        self._stdin = stdin
        self._stdout = stdout

    def run_stdio(self) -> None:
        """Read JSON-RPC from stdin line-by-line, write responses to stdout."""
        for line in self._stdin or sys.stdin:
            line = line.strip()
            if not line:
                continue
            try:
                request = json.loads(line)
            except json.JSONDecodeError:
                self._write_error(None, -32700, "Parse error")
                continue
            if not isinstance(request, dict):
                self._write_error(None, -32600, "Invalid Request")
                continue
            self.handle_message(request)

    def handle_message(self, request: dict[str, Any]) -> None:
        method = request.get("method", "")
        req_id = request.get("id")

        if method == "initialize":
            self._write_result(req_id, self._mcp.initialize())
        elif method == "tools/list":
            self._write_result(req_id, {"tools": self._mcp.list_tools()})
        elif method == "tools/call":
            params = request.get("params")
            if not isinstance(params, dict):
                params = {}
            tool_name = params.get("name", "")
            arguments = params.get("arguments")
            try:
                result = asyncio.run(self._mcp.call_tool(tool_name, arguments))
                self._write_result(req_id, result.to_dict())
            except Exception as exc:
                logger.exception("Unhandled error in tool %s", tool_name)
                self._log.append(f"Unhandled error in {tool_name}: {exc}")
                self._write_result(req_id, {
                    "content": [{"type": "text", "text": f"Internal error: {exc}"}],
                    "isError": True,
                })
        elif method == "ping":
            self._write_result(req_id, {})
        elif isinstance(method, str) and method.startswith("notifications/"):
            pass  # Client notification, no response needed
        else:
            self._write_error(req_id, -32601, f"Method not found: {method}")

    def _write(self, response: dict[str, Any]) -> None:
        out = self._stdout or sys.stdout
        out.write(json.dumps(response) + "\n")
        out.flush()

    def _write_result(self, req_id: Any, result: Any) -> None:
        self._write({"jsonrpc": "2.0", "id": req_id, "result": result})

    def _write_error(self, req_id: Any, code: int, message: str) -> None:
        self._write({
            "jsonrpc": "2.0",
            "id": req_id,
            "error": {"code": code, "message": message},
        })


def main(argv: list[str] | None = None) -> None:
    import argparse

    parser = argparse.ArgumentParser(
        prog="mobsf-mcp",
        description="MobSF MCP stdio server: scan APK/IPA files with MobSF",
    )
    parser.add_argument("--mobsf-url", default=None, help="MobSF base URL (env: MOBSF_URL)")
    parser.add_argument("--api-key", default=None, help="MobSF REST API key (env: MOBSF_API_KEY)")
    parser.add_argument("--log-file", default=None, help="Diagnostic log path (env: MOBSF_LOG_FILE)")
    args = parser.parse_args(argv)

    overrides: dict[str, Any] = {}
    if args.mobsf_url:
        overrides["url"] = args.mobsf_url
    if args.api_key:
        overrides["api_key"] = args.api_key
    if args.log_file:
        overrides["log_file"] = Path(args.log_file)
    settings = Settings(**overrides)

    configure_logging(settings.log_level, json_output=settings.log_json)
    log = DiagnosticLog(settings.log_file)
    log.append("Starting MobSF MCP server...")
    try:
        server = MobSFMCPStdioServer(settings=settings, log=log)
        log.append("Server connected and ready.")
        server.run_stdio()
    except Exception as exc:
        log.append(f"Fatal startup error: {exc}")
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Exception classes for the MobSF MCP server.

Every error here is converted into an ``isError`` tool result before it
reaches the protocol layer.
"""


class MobSFMCPError(Exception):
    """Base exception for the MobSF MCP server."""

    def __init__(self, code: str, message: str, details=None):
        self.code = code
        self.message = message
        self.details = details
        super().__init__(message)

    def tool_text(self) -> str:
        """Text placed in the error tool result."""
        return self.message


class UnsupportedFileTypeError(MobSFMCPError):
    """File extension is neither .apk nor .ipa."""

    def __init__(self, file: str):
        super().__init__(
            "UNSUPPORTED_FILE_TYPE",
            "Unsupported file type. Must be .apk or .ipa",
            details={"file": file},
        )


class InvalidArgumentsError(MobSFMCPError):
    """Tool arguments failed schema validation."""

    def __init__(self, tool_name: str, errors: list[str] | None = None):
        super().__init__(
            "INVALID_ARGUMENTS",
            f"Invalid input to {tool_name}",
            details=errors or [],
        )


class UnknownToolError(MobSFMCPError):
    """Tool name is not registered."""

    def __init__(self, tool_name: str):
        super().__init__("UNKNOWN_TOOL", f"Unknown tool: {tool_name}")


class BackendError(MobSFMCPError):
    """Upload, scan trigger or report fetch against MobSF failed."""

    def __init__(self, message: str, status_code: int | None = None, endpoint: str | None = None):
        super().__init__(
            "BACKEND_ERROR",
            message,
            details={"status_code": status_code, "endpoint": endpoint},
        )
        self.status_code = status_code
        self.endpoint = endpoint

    def tool_text(self) -> str:
        return f"MobSF scan failed: {self.message}"

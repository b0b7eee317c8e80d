"""MCP tool definitions and argument validation.

One tool: ``scanFile``.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import Any

import jsonschema

from mobsf_mcp.models import ScanFileArgs

SCAN_FILE_TOOL = "scanFile"

SCAN_FILE_INPUT_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "file": {
            "type": "string",
            "description": "Path to the APK or IPA file to scan with MobSF",
        },
    },
    "required": ["file"],
    "additionalProperties": False,
    "$schema": "http://json-schema.org/draft-07/schema#",
}

TOOL_DEFINITIONS = [
    {
        "name": SCAN_FILE_TOOL,
        "description": "Upload and scan an APK or IPA using MobSF",
        "inputSchema": SCAN_FILE_INPUT_SCHEMA,
    },
]

# Unknown keys are dropped rather than rejected; only the advertised copy forbids them.
_validation_schema = {k: v for k, v in SCAN_FILE_INPUT_SCHEMA.items() if k != "additionalProperties"}
_validator = jsonschema.Draft7Validator(_validation_schema)


@dataclass(frozen=True)
class ArgsValid:
    args: ScanFileArgs
    ok: bool = field(default=True, init=False)


@dataclass(frozen=True)
class ArgsInvalid:
    errors: list[str]
    ok: bool = field(default=False, init=False)


ArgsResult = ArgsValid | ArgsInvalid


def tool_definitions() -> list[dict[str, Any]]:
    """Return a deep copy of the tool catalog so callers cannot mutate it."""
    return copy.deepcopy(TOOL_DEFINITIONS)


def validate_scan_file_args(arguments: Any) -> ArgsResult:
    """Validate raw ``scanFile`` arguments against the advertised schema."""
    errors = sorted(e.message for e in _validator.iter_errors(arguments))
    if errors:
        return ArgsInvalid(errors=errors)
    return ArgsValid(args=ScanFileArgs(file=arguments["file"]))

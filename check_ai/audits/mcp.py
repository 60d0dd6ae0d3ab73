"""MCP - Model Context Protocol tool integrations."""

import json
from pathlib import Path
from typing import Dict, List

from ..core.checks import CheckDefinition, CheckType, CustomResult
from ..core.probe import FileProbe

SECTION = "MCP"

MCP_CONFIG_FILES = (".mcp.json", "mcp.json")

CHECKS = [
    CheckDefinition(
        id="mcp-json",
        label=".mcp.json",
        section=SECTION,
        weight=2,
        type=CheckType.FILE,
        paths=MCP_CONFIG_FILES,
        description="MCP server configuration for tool integrations",
        hint="echo '{\"mcpServers\":{}}' > .mcp.json",
    ),
    CheckDefinition(
        id="mcp-json-quality",
        label="MCP server count",
        section=SECTION,
        weight=3,
        type=CheckType.CUSTOM,
        custom_key="mcp-quality",
        description="Multiple MCP servers configured for richer agent capabilities",
    ),
    CheckDefinition(
        id="mcp-dir",
        label=".mcp/ directory",
        section=SECTION,
        weight=2,
        type=CheckType.DIR,
        paths=(".mcp",),
        description="MCP server definitions directory",
    ),
]


def analyze(root: Path, probe: FileProbe) -> Dict[str, CustomResult]:
    """Count the servers of the first MCP config file present."""
    return {"mcp-quality": _mcp_quality(root, probe)}


def _mcp_quality(root: Path, probe: FileProbe) -> CustomResult:
    for name in MCP_CONFIG_FILES:
        config_file = root / name
        if not probe.exists(config_file):
            continue

        try:
            config = json.loads(probe.read_text(config_file))
        except json.JSONDecodeError:
            return CustomResult(found=False)

        servers = config
        if isinstance(config, dict):
            for key in ("mcpServers", "servers"):
                if config.get(key) is not None:
                    servers = config[key]
                    break
        names = _server_names(servers)

        if len(names) < 2:
            return CustomResult(found=False, metadata={"servers": len(names)})
        return CustomResult(
            found=True,
            detail=f"{len(names)} server(s): {', '.join(names[:8])}",
            matches=names,
        )

    return CustomResult(found=False)


def _server_names(servers) -> List[str]:
    """Names of the configured servers; list entries use their "name" or index."""
    if isinstance(servers, dict):
        return [str(name) for name in servers]
    if isinstance(servers, list):
        return [
            entry["name"] if isinstance(entry, dict) and isinstance(entry.get("name"), str) else str(i)
            for i, entry in enumerate(servers)
        ]
    return []


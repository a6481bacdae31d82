"""Activity logging for MCP tool calls.

Logs every MCP tool invocation to a JSONL file so humans can see what their
AI agent read from and wrote to the catalog. Each line is a JSON object with
timestamp, tool name, arguments, result preview, error, and duration.

The log file lives alongside the catalog file by default.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path

from uicatalog.config import DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

RESULT_PREVIEW_LIMIT = 500
LOG_FILENAME = "uicatalog-activity.jsonl"


def _resolve_log_path(db_path: Path | None = None) -> Path:
    """Find the log file path: env var, else next to `db_path` or the configured catalog."""
    env_path = os.getenv("UICATALOG_LOG_PATH")
    if env_path:
        return Path(env_path)

    if db_path is None:
        db_path = Path(os.getenv("UICATALOG_DB_PATH", str(DEFAULT_DB_PATH)))
    return Path(db_path).parent / LOG_FILENAME


def log_tool_call(
    tool_name: str,
    arguments: dict,
    result_text: str,
    error: str | None,
    duration_ms: int,
    db_path: Path | None = None,
) -> None:
    """Append a tool call entry to the activity log. Never raises.

    `db_path` is the catalog the call ran against; the log sits beside it
    unless UICATALOG_LOG_PATH says otherwise.
    """
    try:
        entry = {
            "timestamp": datetime.now().isoformat(),
            "tool_name": tool_name,
            "arguments": arguments,
            "result_preview": result_text[:RESULT_PREVIEW_LIMIT] if result_text else "",
            "error": error,
            "duration_ms": duration_ms,
        }
        log_path = _resolve_log_path(db_path)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        with open(log_path, "a", encoding="utf-8") as f:
            f.write(json.dumps(entry, default=str) + "\n")
    except Exception as e:
        # A broken activity log must not fail the tool call itself
        logger.debug(f"Could not write activity log entry for {tool_name}: {e}")


def read_activity_log(
    limit: int = 20,
    tool_name: str | None = None,
    log_path: Path | None = None,
    db_path: Path | None = None,
) -> list[dict]:
    """Read recent activity log entries.

    Returns entries in reverse chronological order (most recent first).
    Lines that are not valid JSON are skipped.
    """
    path = log_path or _resolve_log_path(db_path)
    if not path.exists():
        return []

    entries: list[dict] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            entry = json.loads(line)
        except json.JSONDecodeError:
            continue
        if tool_name and entry.get("tool_name") != tool_name:
            continue
        entries.append(entry)

    entries.reverse()
    return entries[:limit]

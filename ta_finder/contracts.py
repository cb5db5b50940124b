"""Versioned summaries returned by the session entry points."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

from ta_finder import __version__ as TOOL_VERSION

CONTRACT_VERSIONS = {
    "ta_finder.ingest": "1.0.0",
    "ta_finder.search": "1.0.0",
}


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def build_run_summary(
    *,
    operation: str,
    status: str = "ok",
    metrics: dict[str, Any] | None = None,
    warnings: list[str] | None = None,
    error: str | None = None,
) -> dict[str, Any]:
    """
    Summary dict for one ``ingest`` or ``search`` call.

    Raises KeyError for an operation without a registered contract version.
    """
    name = f"ta_finder.{operation}"
    version = CONTRACT_VERSIONS[name]
    return {
        "contract": {"name": name, "version": version},
        "schema_version": version,
        "tool_version": TOOL_VERSION,
        "operation": operation,
        "status": status,
        "generated_at": utc_now_iso(),
        "warnings_count": len(warnings or []),
        "warnings": list(warnings or []),
        "metrics": metrics or {},
        "error": error,
    }

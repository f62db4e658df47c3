"""
Shell command runner — the single place ``subprocess.run`` is called.

Returns a result dict rather than raising, so callers decide whether a
failed command is fatal (it usually isn't: reloads are best-effort).
"""

from __future__ import annotations

import logging
import subprocess
import time
from typing import Any

logger = logging.getLogger(__name__)


def run_command(cmd: list[str], *, timeout: int = 30) -> dict[str, Any]:
    """Run *cmd* and capture its output.

    Returns:
        ``{"ok": True, "stdout": "...", "elapsed_ms": N}`` on success,
        ``{"ok": False, "error": "...", ...}`` on failure.
    """
    logger.debug("Executing: %s", " ".join(cmd))
    start = time.monotonic()
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except subprocess.TimeoutExpired:
        return {"ok": False, "error": f"Command timed out ({timeout}s)"}
    except OSError as e:
        logger.debug("Cannot execute %s: %s", cmd[0], e)
        return {"ok": False, "error": str(e)}

    elapsed_ms = int((time.monotonic() - start) * 1000)
    if result.returncode == 0:
        return {
            "ok": True,
            "stdout": result.stdout or "",
            "elapsed_ms": elapsed_ms,
        }

    stderr = (result.stderr or "").strip()
    return {
        "ok": False,
        "error": stderr or f"Command failed (exit {result.returncode})",
        "returncode": result.returncode,
        "stdout": result.stdout or "",
        "elapsed_ms": elapsed_ms,
    }

# -*- coding: utf-8 -*-
"""Bounded execution of optional external tools.

Every archive and document family that shells out goes through :class:`Tool`:
a presence probe on PATH (cached for the life of the process) and a ``run``
that enforces a timeout and a cap on captured stdout. A timeout, a crash and
an oversized output all come back as a :class:`ToolResult`; nothing here
raises for an ordinary tool failure.
"""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
import threading
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Sequence

log = logging.getLogger(__name__)

_READ_CHUNK = 64 * 1024


@dataclass
class ToolResult:
    returncode: Optional[int]
    stdout: bytes = b""
    timed_out: bool = False
    truncated: bool = False
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.returncode == 0 and not self.timed_out and self.error is None


@lru_cache(maxsize=None)
def which(*names: str) -> Optional[str]:
    for name in names:
        found = shutil.which(name)
        if found:
            return found
    return None


def run_bounded(
    cmd: Sequence[str],
    timeout: float,
    max_output: int,
    env: Optional[dict] = None,
) -> ToolResult:
    """Run ``cmd`` and keep at most ``max_output`` bytes of stdout.

    The process is killed when the timeout fires or when it produces more than
    ``max_output`` bytes; in the latter case the result is marked truncated
    and carries exactly ``max_output`` bytes.
    """
    try:
        proc = subprocess.Popen(
            list(cmd),
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            env=env,
        )
    except OSError as e:
        return ToolResult(None, error=str(e))

    fired = threading.Event()

    def _kill():
        fired.set()
        proc.kill()

    timer = threading.Timer(timeout, _kill)
    timer.start()
    buf = bytearray()
    truncated = False
    try:
        while True:
            chunk = proc.stdout.read(_READ_CHUNK)
            if not chunk:
                break
            buf.extend(chunk)
            if len(buf) > max_output:
                truncated = True
                del buf[max_output:]
                proc.kill()
                break
        proc.stdout.close()
        proc.wait()
    finally:
        timer.cancel()

    if fired.is_set():
        log.warning("%s timed out after %ss", os.path.basename(cmd[0]), timeout)
        return ToolResult(proc.returncode, bytes(buf), timed_out=True, truncated=truncated)
    # a kill for oversized output is not a tool failure
    code = 0 if truncated else proc.returncode
    return ToolResult(code, bytes(buf), truncated=truncated)


class Tool:
    """An external program that may or may not be installed.

    ``names`` are alternative executables tried in order, e.g. ``7z``, ``7za``.
    """

    def __init__(self, label: str, *names: str):
        self.label = label
        self.names = names or (label,)

    @property
    def path(self) -> Optional[str]:
        return which(*self.names)

    def available(self) -> bool:
        return self.path is not None

    def run(
        self,
        args: Sequence[str],
        timeout: float,
        max_output: int,
        env: Optional[dict] = None,
    ) -> ToolResult:
        exe = self.path
        if exe is None:
            return ToolResult(None, error=f"{self.label} not found")
        return run_bounded([exe, *args], timeout=timeout, max_output=max_output, env=env)

    def __repr__(self) -> str:
        return f"Tool({self.label!r})"


TAR = Tool("tar")
UNRAR = Tool("unrar")
SEVEN_ZIP = Tool("7z", "7z", "7za", "7zz")
PDFTOTEXT = Tool("pdftotext")

__all__ = ["Tool", "ToolResult", "run_bounded", "which", "TAR", "UNRAR", "SEVEN_ZIP", "PDFTOTEXT"]

"""Host/runtime diagnostics shown by ``mc --debug`` help output.

Collected on demand only; nothing here is cached.
"""
import os
import platform
import socket
from dataclasses import dataclass
from typing import Dict

import psutil
from rich.filesize import decimal

from mc.errors import DiagnosticsError


@dataclass(frozen=True)
class DiagnosticsSnapshot:
    platform: str
    runtime: str
    memory: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "PLATFORM": self.platform,
            "RUNTIME": self.runtime,
            "MEM": self.memory,
        }


def _hostname() -> str:
    try:
        host = socket.gethostname()
    except OSError as e:
        raise DiagnosticsError("Unable to determine the hostname.", cause=e)
    if not host:
        raise DiagnosticsError("Unable to determine the hostname.")
    return host


def _memory() -> str:
    proc = psutil.Process(os.getpid()).memory_info()
    system = psutil.virtual_memory()
    return (
        f"Used: {decimal(proc.rss)} | Allocated: {decimal(proc.vms)} | "
        f"SystemAvailable: {decimal(system.available)} | SystemTotal: {decimal(system.total)}"
    )


def collect() -> DiagnosticsSnapshot:
    """Take a snapshot of the current process and host.

    Raises DiagnosticsError if the hostname cannot be resolved.
    """
    host = _hostname()
    return DiagnosticsSnapshot(
        platform=f"Host: {host} | OS: {platform.system().lower()} | Arch: {platform.machine()}",
        runtime=(
            f"Version: {platform.python_implementation()} {platform.python_version()} | "
            f"CPUs: {os.cpu_count() or 1}"
        ),
        memory=_memory(),
    )

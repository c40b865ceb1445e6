"""Top-level help/version text.

Layout: name, usage, commands (registration order), global flags, version
line and, in debug mode only, a live diagnostics block.
"""
from typing import Callable, List, Optional

from mc import diagnostics
from mc.registry import FlagDescriptor, Registry
from mc.state import RuntimeMode
from mc.version import get_formatted_version

APP_NAME = "mc"
APP_USAGE = "Minio Client for cloud storage and filesystems"


def _flag_label(flag: FlagDescriptor) -> str:
    names = [f"--{flag.name}"] + [f"-{a}" if len(a) == 1 else f"--{a}" for a in flag.aliases]
    label = ", ".join(names)
    if not flag.is_bool:
        label += f' "{flag.default}"' if flag.default else " VALUE"
    return label


def _columns(rows: List[tuple]) -> List[str]:
    if not rows:
        return []
    width = max(len(left) for left, _ in rows)
    return [f"  {left.ljust(width)}  {right}".rstrip() for left, right in rows]


def render_help(
    registry: Registry,
    mode: Optional[RuntimeMode] = None,
    version_token: Optional[str] = None,
    collect: Callable[[], diagnostics.DiagnosticsSnapshot] = diagnostics.collect,
) -> str:
    """Build the help document.

    ``collect`` is only called when ``mode.debug`` is set; it may raise
    DiagnosticsError.
    """
    mode = mode or RuntimeMode()
    lines = [
        "NAME:",
        f"  {APP_NAME} - {APP_USAGE}",
        "",
        "USAGE:",
        f"  {APP_NAME} [global flags] command [command flags] [arguments...]",
        "",
        "COMMANDS:",
    ]
    lines.extend(_columns([(cmd.name, cmd.usage) for cmd in registry.commands]))
    if registry.flags:
        lines.append("")
        lines.append("GLOBAL FLAGS:")
        lines.extend(_columns([(_flag_label(f), f.usage) for f in registry.flags]))
    version = get_formatted_version(version_token)
    lines.extend(["", "VERSION:", f"  {version}" if version else ""])

    if mode.debug:
        for key, value in collect().as_dict().items():
            lines.extend(["", f"{key}:", f"  {value}"])
    return "\n".join(lines).rstrip() + "\n"

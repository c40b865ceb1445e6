"""cp: copy files and folders from many sources to a single target."""
import os
from pathlib import Path
from typing import List, Optional, Sequence

import click

from mc.client import expand, new_client
from mc.commands._transfer import Transfer, pending_transfers, run_transfers
from mc.config.schema import McConfig
from mc.errors import UsageError
from mc.session import Session, new_session
from mc.state import CommandContext

RECURSIVE_ARG = "--recursive"


def plan_copy(sources: Sequence[str], target: str, recursive: bool, config: Optional[McConfig]) -> List[Transfer]:
    """Expand sources into file-level transfers.

    Behaves like ``cp``: a folder target (existing, trailing slash, or
    several sources) receives sources by name; otherwise the single source
    is copied to the target path itself.
    """
    new_client(target, config)  # rejects unsupported targets up front
    target_path = Path(expand(target, config)).expanduser()
    into_folder = len(sources) > 1 or target.endswith(("/", os.sep)) or target_path.is_dir()

    transfers: List[Transfer] = []
    for source in sources:
        client = new_client(source, config)
        info = client.stat()
        if info.is_dir:
            if not recursive:
                raise UsageError(f"‘{source}’ is a folder. Use --recursive to copy folders.")
            root = target_path / info.key if into_folder else target_path
            for entry in client.list(recursive=True):
                transfers.append(Transfer(entry.url, str(root / entry.key)))
        else:
            dest = target_path / info.key if into_folder else target_path
            transfers.append(Transfer(info.url, str(dest)))
    return transfers


def _command_args(sources: Sequence[str], target: str, recursive: bool) -> List[str]:
    return ([RECURSIVE_ARG] if recursive else []) + list(sources) + [target]


def resume_copy(obj: CommandContext, session: Session) -> None:
    run_transfers(obj, pending_transfers(session), session)


@click.command()
@click.option("--recursive", "-r", is_flag=True, help="Copy folders recursively")
@click.argument("sources", nargs=-1, required=True)
@click.argument("target")
@click.pass_obj
def cp(obj: CommandContext, recursive, sources, target):
    """Copy files and folders from many sources to a single target.

    \b
    Examples:
      mc cp report.pdf backups/
      mc cp --recursive photos/ archive/2015/
    """
    transfers = plan_copy(sources, target, recursive, obj.config)
    session = new_session(
        "cp",
        _command_args(sources, target, recursive),
        [t.pending_key() for t in transfers],
    )
    run_transfers(obj, transfers, session)

"""mirror: replicate one source folder to one or more targets."""
from pathlib import Path
from typing import List, Optional, Sequence

import click

from mc.client import expand, new_client
from mc.commands._transfer import Transfer, pending_transfers, run_transfers
from mc.config.schema import McConfig
from mc.errors import UsageError
from mc.session import Session, new_session
from mc.state import CommandContext

FORCE_ARG = "--force"


def plan_mirror(source: str, targets: Sequence[str], force: bool, config: Optional[McConfig]) -> List[Transfer]:
    """Files under ``source`` missing (or differing in size) under each target."""
    client = new_client(source, config)
    info = client.stat()
    if not info.is_dir:
        raise UsageError(f"Mirror source ‘{source}’ must be a folder.")
    entries = list(client.list(recursive=True))

    transfers: List[Transfer] = []
    for target in targets:
        new_client(target, config)
        root = Path(expand(target, config)).expanduser()
        for entry in entries:
            dest = root / entry.key
            if not force and dest.is_file() and dest.stat().st_size == entry.size:
                continue
            transfers.append(Transfer(entry.url, str(dest)))
    return transfers


def resume_mirror(obj: CommandContext, session: Session) -> None:
    run_transfers(obj, pending_transfers(session), session)


@click.command()
@click.option("--force", "-f", is_flag=True, help="Copy every file, even if an equal-sized copy exists")
@click.argument("source")
@click.argument("targets", nargs=-1, required=True)
@click.pass_obj
def mirror(obj: CommandContext, force, source, targets):
    """Mirror a folder from a single source to many targets.

    \b
    Examples:
      mc mirror photos/ /mnt/backup/photos /mnt/usb/photos
    """
    transfers = plan_mirror(source, targets, force, obj.config)
    session = new_session(
        "mirror",
        ([FORCE_ARG] if force else []) + [source] + list(targets),
        [t.pending_key() for t in transfers],
    )
    run_transfers(obj, transfers, session)

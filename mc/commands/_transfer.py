"""Shared copy loop for cp and mirror, with session save on interruption."""
import logging
from dataclasses import dataclass
from typing import List

from mc.client import new_client
from mc.console import Message
from mc.errors import ReportedError
from mc.session import Session, SessionStore
from mc.state import CommandContext

logger = logging.getLogger(__name__)

_SEP = "\t"


@dataclass(frozen=True)
class Transfer:
    source: str
    target: str

    def pending_key(self) -> str:
        return f"{self.source}{_SEP}{self.target}"


class CopyMessage(Message):
    source: str
    target: str
    size: int

    def text(self) -> str:
        return f"‘{self.source}’ -> ‘{self.target}’"


def pending_transfers(session: Session) -> List[Transfer]:
    """Rebuild the outstanding transfers recorded in a saved session."""
    transfers = []
    for entry in session.pending:
        source, sep, target = entry.partition(_SEP)
        if not sep:
            raise ReportedError(f"Session ‘{session.session_id}’ has a malformed pending entry ‘{entry}’.")
        transfers.append(Transfer(source, target))
    return transfers


def _save(obj: CommandContext, session: Session, remaining: List[Transfer]) -> str:
    session.pending = [t.pending_key() for t in remaining]
    SessionStore(obj.config_dir).save(session)
    return session.session_id


def run_transfers(obj: CommandContext, transfers: List[Transfer], session: Session) -> None:
    """Copy every transfer in order.

    On Ctrl-C or a copy failure the transfers not yet done are written to
    ``session`` so ``mc session resume`` can finish them. A resumed session
    is removed once everything has been copied.
    """
    verbose = obj.mode.json or not (obj.mode.quiet or obj.mode.mimic)
    remaining = list(transfers)
    while remaining:
        transfer = remaining[0]
        try:
            with new_client(transfer.source, obj.config).get() as reader:
                size = new_client(transfer.target, obj.config).put(reader)
        except KeyboardInterrupt:
            sid = _save(obj, session, remaining)
            raise ReportedError(f"Session safely terminated. To resume run ‘mc session resume {sid}’.")
        except ReportedError as e:
            sid = _save(obj, session, remaining)
            raise ReportedError(f"{e.message} Session saved as ‘{sid}’.", cause=e.cause)
        remaining.pop(0)
        session.header.last_copied = transfer.source
        logger.debug("Copied %s to %s (%d bytes)", transfer.source, transfer.target, size)
        if verbose:
            obj.console.emit(CopyMessage(source=transfer.source, target=transfer.target, size=size))

    store = SessionStore(obj.config_dir)
    if session.session_id and store.exists(session.session_id):
        store.remove(session.session_id)

"""session: list, resume and clear saved cp/mirror sessions."""
from datetime import datetime
from typing import List

import click

from mc.commands.cp import resume_copy
from mc.commands.mirror import resume_mirror
from mc.console import Message
from mc.errors import ReportedError, UsageError
from mc.session import SessionStore
from mc.state import CommandContext

RESUMERS = {
    "cp": resume_copy,
    "mirror": resume_mirror,
}


class SessionMessage(Message):
    session_id: str
    time: datetime
    command_type: str
    command_args: List[str]
    pending: int

    def text(self) -> str:
        stamp = self.time.strftime("%Y-%m-%d %H:%M:%S %Z")
        args = " ".join(self.command_args)
        return f"{self.session_id} [{stamp}] {self.command_type} {args} ({self.pending} pending)"


class ClearMessage(Message):
    session_id: str

    def text(self) -> str:
        return f"Session ‘{self.session_id}’ cleared successfully."


@click.group()
def session():
    """Manage saved sessions of cp and mirror operations."""


@session.command("list")
@click.pass_obj
def list_sessions(obj: CommandContext):
    """List all saved sessions."""
    sessions = SessionStore(obj.config_dir).list()
    if not sessions:
        obj.console.info("No saved sessions.")
    for saved in sessions:
        obj.console.emit(SessionMessage(
            session_id=saved.session_id,
            time=saved.header.when,
            command_type=saved.header.command_type,
            command_args=saved.header.command_args,
            pending=len(saved.pending),
        ))


@session.command()
@click.argument("session_id")
@click.pass_obj
def resume(obj: CommandContext, session_id):
    """Resume a saved session."""
    saved = SessionStore(obj.config_dir).load(session_id)
    command_type = saved.header.command_type
    resumer = RESUMERS.get(command_type)
    if resumer is None or obj.registry.lookup_command(command_type) is None:
        raise ReportedError(f"Session ‘{session_id}’ was saved by ‘{command_type}’, which cannot be resumed.")
    resumer(obj, saved)


@session.command()
@click.option("--all", "clear_all", is_flag=True, help="Clear every saved session")
@click.argument("session_id", required=False)
@click.pass_obj
def clear(obj: CommandContext, clear_all, session_id):
    """Clear one saved session, or all of them."""
    store = SessionStore(obj.config_dir)
    if clear_all:
        ids = store.ids()
    elif session_id:
        ids = [session_id]
    else:
        raise UsageError("Specify a session ID or --all.")
    for sid in ids:
        store.remove(sid)
        obj.console.emit(ClearMessage(session_id=sid))

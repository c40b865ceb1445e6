"""Resumable copy/mirror sessions stored under ``<config>/session``.

Session file history:
  1  flat: started, commandType, sourceURLs, targetURL, files
  2  header {when, commandType, commandArgs, lastCopied} + pending (current)
"""
import logging
import re
import secrets
import string
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from mc.config.files import read_json, write_json_atomic
from mc.config.paths import session_dir
from mc.errors import ReportedError

logger = logging.getLogger(__name__)

CURRENT_SESSION_VERSION = "2"
_ID_ALPHABET = string.ascii_letters + string.digits
_VALID_ID = re.compile(r"[A-Za-z0-9]+")


class _Strict(BaseModel):
    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class SessionV1(_Strict):
    version: Literal["1"]
    started: datetime
    command_type: str = Field(alias="commandType")
    source_urls: List[str] = Field(default_factory=list, alias="sourceURLs")
    target_url: str = Field(default="", alias="targetURL")
    last_copied: str = Field(default="", alias="lastCopied")
    files: List[str] = Field(default_factory=list)


class SessionHeader(_Strict):
    when: datetime
    command_type: str = Field(alias="commandType")
    command_args: List[str] = Field(default_factory=list, alias="commandArgs")
    last_copied: str = Field(default="", alias="lastCopied")


class Session(_Strict):
    version: Literal["2"] = CURRENT_SESSION_VERSION
    header: SessionHeader
    pending: List[str] = Field(default_factory=list)
    session_id: str = Field(default="", exclude=True)

    def to_file(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


def new_session_id(length: int = 8) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


def new_session(command_type: str, command_args: List[str], pending: List[str]) -> Session:
    return Session(
        header=SessionHeader(
            when=datetime.now(timezone.utc),
            command_type=command_type,
            command_args=list(command_args),
        ),
        pending=list(pending),
        session_id=new_session_id(),
    )


class SessionStore:
    """File-per-session storage."""

    def __init__(self, config_dir: Path):
        self.root = session_dir(config_dir)

    def path(self, session_id: str) -> Path:
        """File for ``session_id``; anything outside the ID alphabet is unknown."""
        if not _VALID_ID.fullmatch(session_id or ""):
            raise ReportedError(f"Session ‘{session_id}’ not found.")
        return self.root / f"{session_id}.json"

    def exists(self, session_id: str) -> bool:
        return self.path(session_id).is_file()

    def save(self, session: Session) -> Path:
        if not session.session_id:
            session.session_id = new_session_id()
        path = self.path(session.session_id)
        write_json_atomic(path, session.to_file())
        logger.debug("Saved session %s to %s", session.session_id, path)
        return path

    def load(self, session_id: str) -> Session:
        path = self.path(session_id)
        if not path.is_file():
            raise ReportedError(f"Session ‘{session_id}’ not found.")
        try:
            session = Session.model_validate(read_json(path))
        except (OSError, ValueError, ValidationError) as e:
            raise ReportedError(f"Unable to read session ‘{session_id}’.", cause=e)
        session.session_id = session_id
        return session

    def ids(self) -> List[str]:
        if not self.root.is_dir():
            return []
        return [p.stem for p in sorted(self.root.glob("*.json")) if _VALID_ID.fullmatch(p.stem)]

    def list(self) -> List[Session]:
        sessions = [self.load(sid) for sid in self.ids()]
        return sorted(sessions, key=lambda s: s.header.when)

    def remove(self, session_id: str) -> None:
        path = self.path(session_id)
        if not path.is_file():
            raise ReportedError(f"Session ‘{session_id}’ not found.")
        path.unlink()

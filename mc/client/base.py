"""Client interface shared by every storage backend."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import BinaryIO, Iterator

from mc.errors import UnsupportedBackendError


@dataclass(frozen=True)
class ContentInfo:
    """One listed object or folder. ``key`` is relative to the listed URL."""

    url: str
    key: str
    size: int
    time: datetime
    is_dir: bool


class Client(ABC):
    def __init__(self, url: str):
        self.url = url

    @abstractmethod
    def stat(self) -> ContentInfo:
        ...

    @abstractmethod
    def list(self, recursive: bool = False) -> Iterator[ContentInfo]:
        ...

    @abstractmethod
    def get(self) -> BinaryIO:
        ...

    @abstractmethod
    def put(self, reader: BinaryIO) -> int:
        ...

    @abstractmethod
    def make_bucket(self) -> None:
        ...

    def share_download(self, expires: timedelta) -> str:
        raise UnsupportedBackendError(f"Sharing is not supported for ‘{self.url}’.")

    def get_access(self) -> str:
        raise UnsupportedBackendError(f"Access permissions are not supported for ‘{self.url}’.")

    def set_access(self, permission: str) -> None:
        raise UnsupportedBackendError(f"Access permissions are not supported for ‘{self.url}’.")

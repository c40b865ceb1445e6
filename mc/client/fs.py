"""Local filesystem backend."""
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Iterator, Union

from mc.client.base import Client, ContentInfo
from mc.errors import ReportedError


class FsClient(Client):
    def __init__(self, path: Union[str, Path]):
        super().__init__(str(path))
        self.path = Path(path).expanduser()

    def _info(self, path: Path, key: str) -> ContentInfo:
        st = path.stat()
        is_dir = path.is_dir()
        return ContentInfo(
            url=str(path),
            key=key,
            size=0 if is_dir else st.st_size,
            time=datetime.fromtimestamp(st.st_mtime, tz=timezone.utc),
            is_dir=is_dir,
        )

    def _require(self) -> None:
        if not self.path.exists():
            raise ReportedError(f"‘{self.url}’ does not exist.")

    def stat(self) -> ContentInfo:
        self._require()
        return self._info(self.path, self.path.name)

    def list(self, recursive: bool = False) -> Iterator[ContentInfo]:
        self._require()
        if self.path.is_file():
            yield self._info(self.path, self.path.name)
            return
        try:
            if recursive:
                for child in sorted(self.path.rglob("*")):
                    if child.is_file():
                        yield self._info(child, child.relative_to(self.path).as_posix())
            else:
                for child in sorted(self.path.iterdir()):
                    key = child.name + "/" if child.is_dir() else child.name
                    yield self._info(child, key)
        except OSError as e:
            raise ReportedError(f"Unable to list ‘{self.url}’.", cause=e)

    def get(self) -> BinaryIO:
        self._require()
        if self.path.is_dir():
            raise ReportedError(f"‘{self.url}’ is a folder.")
        try:
            return open(self.path, "rb")
        except OSError as e:
            raise ReportedError(f"Unable to open ‘{self.url}’.", cause=e)

    def put(self, reader: BinaryIO) -> int:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "wb") as out:
                shutil.copyfileobj(reader, out)
                return out.tell()
        except OSError as e:
            raise ReportedError(f"Unable to write ‘{self.url}’.", cause=e)

    def make_bucket(self) -> None:
        if self.path.exists():
            raise ReportedError(f"‘{self.url}’ already exists.")
        try:
            self.path.mkdir(parents=True)
        except OSError as e:
            raise ReportedError(f"Unable to create ‘{self.url}’.", cause=e)

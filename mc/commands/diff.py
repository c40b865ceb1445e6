"""diff: compare two files or folders by name, type and size."""
from typing import Dict, Iterator, Optional

import click

from mc.client import ContentInfo, new_client
from mc.config.schema import McConfig
from mc.console import Message
from mc.state import CommandContext

ONLY_IN_FIRST = "only-in-first"
ONLY_IN_SECOND = "only-in-second"
DIFFERENT_TYPE = "type"
DIFFERENT_SIZE = "size"


class DiffMessage(Message):
    first: Optional[str] = None
    second: Optional[str] = None
    diff: str

    def text(self) -> str:
        if self.diff == ONLY_IN_FIRST:
            return f"‘{self.first}’ - only in first."
        if self.diff == ONLY_IN_SECOND:
            return f"‘{self.second}’ - only in second."
        if self.diff == DIFFERENT_TYPE:
            return f"‘{self.first}’ and ‘{self.second}’ - differ in type."
        return f"‘{self.first}’ and ‘{self.second}’ - differ in size."


def compare(first: str, second: str, config: Optional[McConfig] = None) -> Iterator[DiffMessage]:
    left_client = new_client(first, config)
    right_client = new_client(second, config)
    left = left_client.stat()
    right = right_client.stat()

    if left.is_dir != right.is_dir:
        yield DiffMessage(first=left.url, second=right.url, diff=DIFFERENT_TYPE)
        return
    if not left.is_dir:
        if left.size != right.size:
            yield DiffMessage(first=left.url, second=right.url, diff=DIFFERENT_SIZE)
        return

    left_entries: Dict[str, ContentInfo] = {e.key: e for e in left_client.list(recursive=True)}
    right_entries: Dict[str, ContentInfo] = {e.key: e for e in right_client.list(recursive=True)}
    for key in sorted(set(left_entries) | set(right_entries)):
        a = left_entries.get(key)
        b = right_entries.get(key)
        if b is None:
            yield DiffMessage(first=a.url, diff=ONLY_IN_FIRST)
        elif a is None:
            yield DiffMessage(second=b.url, diff=ONLY_IN_SECOND)
        elif a.size != b.size:
            yield DiffMessage(first=a.url, second=b.url, diff=DIFFERENT_SIZE)


@click.command()
@click.argument("first")
@click.argument("second")
@click.pass_obj
def diff(obj: CommandContext, first, second):
    """Compute differences between two files or folders."""
    for message in compare(first, second, obj.config):
        obj.console.emit(message)

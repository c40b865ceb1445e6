"""ls: list files and folders."""
from datetime import datetime

import click
from rich.filesize import decimal

from mc.client import ContentInfo, new_client
from mc.console import Message
from mc.state import CommandContext


class ContentMessage(Message):
    key: str
    size: int
    time: datetime
    type: str

    def text(self) -> str:
        stamp = self.time.strftime("%Y-%m-%d %H:%M:%S %Z")
        return f"[{stamp}] {decimal(self.size):>9} {self.key}"

    @classmethod
    def from_info(cls, info: ContentInfo) -> "ContentMessage":
        return cls(
            key=info.key,
            size=info.size,
            time=info.time,
            type="folder" if info.is_dir else "file",
        )


@click.command()
@click.option("--recursive", "-r", is_flag=True, help="List recursively")
@click.argument("urls", nargs=-1)
@click.pass_obj
def ls(obj: CommandContext, recursive, urls):
    """List files and folders.

    \b
    Examples:
      mc ls ~/Photos
      mc ls --recursive backups/
    """
    for url in urls or (".",):
        client = new_client(url, obj.config)
        for info in client.list(recursive=recursive):
            if obj.mode.mimic and not obj.mode.json:
                obj.console.line(info.key)
            else:
                obj.console.emit(ContentMessage.from_info(info))

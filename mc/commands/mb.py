"""mb: make a bucket or folder."""
import click

from mc.client import new_client
from mc.console import Message
from mc.state import CommandContext


class BucketMessage(Message):
    bucket: str

    def text(self) -> str:
        return f"Bucket created successfully ‘{self.bucket}’."


@click.command()
@click.argument("urls", nargs=-1, required=True)
@click.pass_obj
def mb(obj: CommandContext, urls):
    """Make a bucket or folder."""
    for url in urls:
        client = new_client(url, obj.config)
        client.make_bucket()
        obj.console.emit(BucketMessage(bucket=client.url))

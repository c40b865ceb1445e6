"""cat: stream file contents to stdout."""
import click

from mc.client import new_client
from mc.state import CommandContext

CHUNK_SIZE = 1024 * 1024


@click.command()
@click.argument("urls", nargs=-1, required=True)
@click.pass_obj
def cat(obj: CommandContext, urls):
    """Display contents of a file."""
    for url in urls:
        with new_client(url, obj.config).get() as reader:
            while True:
                chunk = reader.read(CHUNK_SIZE)
                if not chunk:
                    break
                obj.console.raw_write(chunk)

"""access: show or set public access on a bucket or folder."""
import click

from mc.client import new_client
from mc.console import Message
from mc.state import CommandContext

PERMISSIONS = ("private", "readonly", "public", "authenticated")


class AccessMessage(Message):
    url: str
    permission: str

    def text(self) -> str:
        return f"Access permission for ‘{self.url}’ is ‘{self.permission}’."


@click.command()
@click.argument("url")
@click.argument("permission", required=False, type=click.Choice(PERMISSIONS))
@click.pass_obj
def access(obj: CommandContext, url, permission):
    """Set public access permissions on bucket or folder."""
    client = new_client(url, obj.config)
    if permission:
        client.set_access(permission)
    else:
        permission = client.get_access()
    obj.console.emit(AccessMessage(url=client.url, permission=permission))

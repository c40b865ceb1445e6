"""version: print build information."""
import click

from mc.console import Message
from mc.state import CommandContext
from mc.version import BUILD_VERSION, get_formatted_version


class VersionMessage(Message):
    version: str
    release_tag: str
    package: str

    def text(self) -> str:
        return "\n".join([
            f"Version: {self.version or '(development build)'}",
            f"Release-Tag: {self.release_tag}",
            f"Package: {self.package}",
        ])


@click.command()
@click.pass_obj
def version(obj: CommandContext):
    """Print version."""
    from mc import __version__

    obj.console.emit(VersionMessage(
        version=get_formatted_version(),
        release_tag=BUILD_VERSION,
        package=__version__,
    ))

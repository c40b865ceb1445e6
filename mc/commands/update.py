"""Update CLI command: check for a newer mc release."""
import click

from mc.config.paths import update_cache_file
from mc.console import Message
from mc.state import CommandContext


class UpdateMessage(Message):
    current: str
    latest: str
    update_available: bool
    upgrade_cmd: str

    def text(self) -> str:
        if not self.update_available:
            return f"You are running the latest version (v{self.current})."
        return f"Update available: v{self.current} -> v{self.latest}. Upgrade with: {self.upgrade_cmd}"


@click.command()
@click.option("--refresh", is_flag=True, help="Ignore the cached result and query the package index")
@click.pass_obj
def update(obj: CommandContext, refresh):
    """Check for new software updates."""
    from mc import __version__
    from mc.update import check_for_updates

    obj.console.info("Checking for updates...")
    info = check_for_updates(__version__, update_cache_file(obj.config_dir), use_cache=not refresh)
    obj.console.emit(UpdateMessage(
        current=info.current,
        latest=info.latest,
        update_available=info.available,
        upgrade_cmd=info.upgrade_cmd,
    ))

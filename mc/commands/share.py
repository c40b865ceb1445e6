"""share: generate a time-limited download URL."""
import re
from datetime import timedelta

import click

from mc.client import new_client
from mc.console import Message
from mc.errors import UsageError
from mc.state import CommandContext

MAX_EXPIRY = timedelta(days=7)
_DURATION = re.compile(r"^(?:(\d+)d)?(?:(\d+)h)?(?:(\d+)m)?(?:(\d+)s)?$")


def parse_expiry(value: str) -> timedelta:
    """Parse durations like ``168h``, ``2d12h`` or ``30m``."""
    match = _DURATION.match(value.strip())
    if not value or not match or not any(match.groups()):
        raise UsageError(f"Invalid expiry ‘{value}’; use a duration such as 24h or 2d.")
    days, hours, minutes, seconds = (int(g or 0) for g in match.groups())
    expiry = timedelta(days=days, hours=hours, minutes=minutes, seconds=seconds)
    if expiry <= timedelta(0) or expiry > MAX_EXPIRY:
        raise UsageError(f"Expiry ‘{value}’ must be between 1s and 7d.")
    return expiry


class ShareMessage(Message):
    url: str
    share_url: str
    expires_seconds: int

    def text(self) -> str:
        return f"{self.url}\nShare: {self.share_url}\nExpiry: {timedelta(seconds=self.expires_seconds)}"


@click.command()
@click.option("--expire", "-E", default="168h", show_default=True, help="Link lifetime, at most 7d")
@click.argument("url")
@click.pass_obj
def share(obj: CommandContext, expire, url):
    """Generate URLs for sharing."""
    expiry = parse_expiry(expire)
    client = new_client(url, obj.config)
    link = client.share_download(expiry)
    obj.console.emit(ShareMessage(url=client.url, share_url=link, expires_seconds=int(expiry.total_seconds())))

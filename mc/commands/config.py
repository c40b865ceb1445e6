"""config: manage aliases and host credentials in the config file."""
import click
from pydantic import ValidationError

from mc.config.controller import save_config
from mc.config.schema import HostConfig, McConfig
from mc.console import Message
from mc.errors import ReportedError
from mc.state import CommandContext


class AliasMessage(Message):
    alias: str
    url: str = ""
    action: str = "list"

    def text(self) -> str:
        if self.action == "add":
            return f"Added alias ‘{self.alias}’ for ‘{self.url}’."
        if self.action == "remove":
            return f"Removed alias ‘{self.alias}’."
        return f"{self.alias}: {self.url}"


class HostMessage(Message):
    host: str
    access_key_id: str = ""
    api: str = ""
    action: str = "list"

    def text(self) -> str:
        if self.action == "add":
            return f"Added host ‘{self.host}’."
        if self.action == "remove":
            return f"Removed host ‘{self.host}’."
        return f"{self.host}: {self.access_key_id or '(anonymous)'} {self.api}"


def _store(obj: CommandContext, data: dict) -> McConfig:
    """Validate and persist an edited config, then make it current."""
    try:
        updated = McConfig.model_validate(data)
    except ValidationError as e:
        raise ReportedError("Configuration change rejected.", cause=e)
    try:
        save_config(obj.config_dir, updated)
    except OSError as e:
        raise ReportedError("Unable to save configuration file.", cause=e)
    obj.config = updated
    return updated


@click.group()
def config():
    """Modify, add, remove aliases and hosts in the configuration file."""


@config.group()
def alias():
    """Manage URL aliases."""


@alias.command("list")
@click.pass_obj
def alias_list(obj: CommandContext):
    for name, url in obj.config.aliases.items():
        obj.console.emit(AliasMessage(alias=name, url=url))


@alias.command("add")
@click.argument("name")
@click.argument("url")
@click.pass_obj
def alias_add(obj: CommandContext, name, url):
    data = obj.config.to_file()
    data["aliases"][name] = url
    _store(obj, data)
    obj.console.emit(AliasMessage(alias=name, url=url, action="add"))


@alias.command("remove")
@click.argument("name")
@click.pass_obj
def alias_remove(obj: CommandContext, name):
    data = obj.config.to_file()
    if name not in data["aliases"]:
        raise ReportedError(f"Alias ‘{name}’ does not exist.")
    del data["aliases"][name]
    _store(obj, data)
    obj.console.emit(AliasMessage(alias=name, action="remove"))


@config.group()
def host():
    """Manage host credentials."""


@host.command("list")
@click.pass_obj
def host_list(obj: CommandContext):
    for glob, entry in obj.config.hosts.items():
        obj.console.emit(HostMessage(host=glob, access_key_id=entry.access_key_id, api=entry.api))


@host.command("add")
@click.argument("glob")
@click.argument("access_key_id")
@click.argument("secret_access_key")
@click.option("--api", type=click.Choice(["S3v2", "S3v4"]), default="S3v4", show_default=True)
@click.pass_obj
def host_add(obj: CommandContext, glob, access_key_id, secret_access_key, api):
    data = obj.config.to_file()
    entry = HostConfig(access_key_id=access_key_id, secret_access_key=secret_access_key, api=api)
    data["hosts"][glob] = entry.model_dump(by_alias=True)
    _store(obj, data)
    obj.console.emit(HostMessage(host=glob, access_key_id=access_key_id, api=api, action="add"))


@host.command("remove")
@click.argument("glob")
@click.pass_obj
def host_remove(obj: CommandContext, glob):
    data = obj.config.to_file()
    if glob not in data["hosts"]:
        raise ReportedError(f"Host ‘{glob}’ does not exist.")
    del data["hosts"][glob]
    _store(obj, data)
    obj.console.emit(HostMessage(host=glob, action="remove"))

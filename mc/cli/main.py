"""
mc command-line interface.

Builds the command/flag registry, wraps it in a click group whose callback
runs the bootstrap pipeline, and dispatches to the registered subcommand.
Unknown command names resolve to a placeholder that reports the error after
bootstrap, so environment failures always take precedence.
"""

import sys
from typing import List, Optional

import click
from pydantic import ValidationError

from mc.bootstrap import Bootstrapper, runtime_mode_from_flags
from mc.console import McConsole
from mc.errors import CommandNotFoundError, ConfigError, FatalError, McError
from mc.help import APP_NAME, APP_USAGE, render_help
from mc.registry import CommandDescriptor, FlagDescriptor, Registry
from mc.state import CommandContext, EnvironmentDefaults

HELP_FLAGS = ("--help", "-h")
MODE_KEY = "mc.mode"


# ==============================================================================
# Registry
# ==============================================================================
def build_registry(defaults: Optional[EnvironmentDefaults] = None) -> Registry:
    from mc.commands.access import access
    from mc.commands.cat import cat
    from mc.commands.config import config
    from mc.commands.cp import cp
    from mc.commands.diff import diff
    from mc.commands.ls import ls
    from mc.commands.mb import mb
    from mc.commands.mirror import mirror
    from mc.commands.session import session
    from mc.commands.share import share
    from mc.commands.update import update
    from mc.commands.version import version

    if defaults is None:
        try:
            defaults = EnvironmentDefaults()
        except ValidationError as e:
            raise ConfigError("Invalid MC_* environment defaults.", cause=e)
    registry = Registry()

    # Register all the commands
    registry.register_command(CommandDescriptor("ls", "List files and folders", ls))
    registry.register_command(CommandDescriptor("mb", "Make a bucket or folder", mb))
    registry.register_command(CommandDescriptor("cat", "Display contents of a file", cat))
    registry.register_command(CommandDescriptor(
        "cp", "Copy files and folders from many sources to a single destination", cp))
    registry.register_command(CommandDescriptor(
        "mirror", "Mirror folders from a single source to many destinations", mirror))
    registry.register_command(CommandDescriptor(
        "session", "Manage saved sessions of cp and mirror operations", session))
    registry.register_command(CommandDescriptor("share", "Generate URLs for sharing", share))
    registry.register_command(CommandDescriptor(
        "diff", "Compute differences between two files or folders", diff))
    registry.register_command(CommandDescriptor(
        "access", "Set public access permissions on bucket or folder", access))
    registry.register_command(CommandDescriptor(
        "config", "Modify, add, remove alias from default configuration file", config))
    registry.register_command(CommandDescriptor("update", "Check for new software updates", update))
    registry.register_command(CommandDescriptor("version", "Print version", version))

    # Register all the global flags
    registry.register_flag(FlagDescriptor(
        "config-folder", str, defaults.config_folder, "Path to configuration folder",
        aliases=("C",), effect="config_dir"))
    registry.register_flag(FlagDescriptor(
        "quiet", bool, defaults.quiet, "Suppress chatty console output", aliases=("q",), effect="quiet"))
    registry.register_flag(FlagDescriptor(
        "mimic", bool, defaults.mimic, "Behave like operating system tools. Use with shell aliases", effect="mimic"))
    registry.register_flag(FlagDescriptor(
        "json", bool, defaults.json_mode, "Enable json formatted output", effect="json"))
    registry.register_flag(FlagDescriptor(
        "debug", bool, defaults.debug, "Enable HTTP tracing and debug output", effect="debug"))
    registry.register_flag(FlagDescriptor("help", bool, False, "Show help", aliases=("h",)))
    return registry


# ==============================================================================
# Dispatch
# ==============================================================================
def _command_not_found(name: str) -> click.Command:
    """Placeholder for an unregistered command name."""

    @click.command(
        name=name,
        add_help_option=False,
        context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
    )
    @click.pass_context
    def not_found(ctx):
        if any(arg in HELP_FLAGS for arg in ctx.args):
            registry = ctx.find_root().command.registry
            click.echo(render_help(registry, ctx.obj.mode), nl=False)
            return None
        return CommandNotFoundError(name)

    return not_found


@click.pass_context
def _bootstrap(ctx, **params):
    group = ctx.command
    group.registry.seal()

    if params.get("help"):
        mode = runtime_mode_from_flags(group.registry, params)
        ctx.meta[MODE_KEY] = mode
        click.echo(render_help(group.registry, mode), nl=False)
        ctx.exit(0)

    result = group.bootstrapper.run(params)
    ctx.meta[MODE_KEY] = result.mode
    if not result.ok:
        raise result.error

    ctx.obj = CommandContext(
        registry=group.registry,
        mode=result.mode,
        config=result.config,
        console=McConsole(result.mode),
    )
    if ctx.invoked_subcommand is None:
        click.echo(render_help(group.registry, result.mode), nl=False)


class McGroup(click.Group):
    """Top-level group backed by a Registry instead of click's own table."""

    def __init__(self, registry: Registry, bootstrapper: Optional[Bootstrapper] = None, **attrs):
        attrs.setdefault("name", APP_NAME)
        attrs.setdefault("help", APP_USAGE)
        super().__init__(
            callback=_bootstrap,
            params=[flag.to_option() for flag in registry.flags],
            invoke_without_command=True,
            add_help_option=False,
            **attrs,
        )
        self.registry = registry
        self.bootstrapper = bootstrapper or Bootstrapper(registry)

    def list_commands(self, ctx) -> List[str]:
        return [descriptor.name for descriptor in self.registry.commands]

    def get_command(self, ctx, cmd_name):
        descriptor = self.registry.lookup_command(cmd_name)
        return descriptor.handler if descriptor is not None else None

    def resolve_command(self, ctx, args):
        cmd_name = args[0]
        descriptor = self.registry.lookup_command(cmd_name)
        if descriptor is None:
            return cmd_name, _command_not_found(cmd_name), args[1:]
        return cmd_name, descriptor.handler, args[1:]

    def format_help(self, ctx, formatter):
        formatter.write(render_help(self.registry, ctx.meta.get(MODE_KEY)))

    def invoke(self, ctx):
        try:
            rv = super().invoke(ctx)
        except McError as err:
            rv = err
        if isinstance(rv, McError):
            if isinstance(ctx.obj, CommandContext):
                console = ctx.obj.console
            else:
                console = McConsole(ctx.meta.get(MODE_KEY))
            console.error(rv)
            ctx.exit(rv.exit_code)
        return rv


def build_app(registry: Optional[Registry] = None, bootstrapper: Optional[Bootstrapper] = None) -> McGroup:
    registry = registry if registry is not None else build_registry()
    return McGroup(registry, bootstrapper)


# ==============================================================================
# Entry Point
# ==============================================================================
def main(argv: Optional[List[str]] = None):
    try:
        registry = build_registry()
    except FatalError as err:
        McConsole().error(err)
        sys.exit(err.exit_code)
    app = build_app(registry)
    app.main(args=argv, prog_name=APP_NAME)


if __name__ == "__main__":
    main()

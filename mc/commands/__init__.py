"""Built-in subcommands, one click command or group per module."""

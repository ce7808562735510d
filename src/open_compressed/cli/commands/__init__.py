"""ocat subcommands."""

"""CLI subcommand implementations. Each module exposes run(args) -> int."""

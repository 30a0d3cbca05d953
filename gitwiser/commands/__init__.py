"""gitwiser subcommand handlers."""

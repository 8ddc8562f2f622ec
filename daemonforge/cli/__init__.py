"""Command-line interface for daemonforge."""

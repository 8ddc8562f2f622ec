"""Entry point for running daemonforge as a module: python -m daemonforge."""

from daemonforge.cli.commands import app

if __name__ == "__main__":
    app()

"""daemonforge - install autorun scripts for the host's most specific OS driver."""

__version__ = "0.1.0"
__logo__ = "⚙"

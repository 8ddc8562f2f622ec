"""Autorun script validation, rendering and installation."""

from daemonforge.autorun.descriptor import AppDescriptor, validate_descriptor
from daemonforge.autorun.installer import (
    DEFAULT_MODE,
    AutoRunInstaller,
    AutoRunResult,
    render_autorun,
)

__all__ = [
    "DEFAULT_MODE",
    "AppDescriptor",
    "AutoRunInstaller",
    "AutoRunResult",
    "render_autorun",
    "validate_descriptor",
]

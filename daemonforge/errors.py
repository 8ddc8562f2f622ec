"""Error taxonomy shared by driver discovery and autorun installation."""

from pathlib import Path


class DaemonForgeError(Exception):
    """Base class for every reportable daemonforge failure."""


class DiscoveryError(DaemonForgeError):
    """Raised when a registered driver variant cannot be located or constructed."""


class EmptyRegistryError(DiscoveryError):
    """Raised when the registration table yields no constructible driver at all."""


class NoCompatibleDriverError(DaemonForgeError):
    """Raised when no driver reports itself installed on this host."""


class ConfigError(DaemonForgeError):
    """Raised when a driver lacks a template path or install directory."""


class TemplateMissingError(DaemonForgeError):
    """Raised when a configured template file does not exist."""


class RenderError(DaemonForgeError):
    """Raised when a template cannot be rendered."""


class ValidationError(DaemonForgeError):
    """One missing or malformed descriptor field."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class PathError(DaemonForgeError):
    """A filesystem path is missing, not executable or not writable."""

    def __init__(self, message: str, path: Path | None = None):
        super().__init__(message)
        self.path = path


class WriteError(PathError):
    """The autorun script could not be written."""


class FileModeError(PathError):
    """The autorun script mode could not be set."""


class AutoRunFailed(DaemonForgeError):
    """Raised by AutoRunResult.raise_for_errors() with every collected error."""

    def __init__(self, errors: list[DaemonForgeError]):
        self.errors = list(errors)
        super().__init__("; ".join(str(e) for e in self.errors) or "autorun failed")

"""Abstract OS driver interface and shared types."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from loguru import logger

from daemonforge.autorun import template
from daemonforge.autorun.descriptor import AppDescriptor
from daemonforge.autorun.installer import DEFAULT_MODE, AutoRunInstaller, AutoRunResult
from daemonforge.errors import ConfigError, PathError, TemplateMissingError

TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"


@dataclass(frozen=True)
class DriverDetails:
    shorthand: str
    ancestors: tuple[str, ...] = ()


class Driver(ABC):
    """Abstract base for OS-family drivers.

    A driver knows whether its OS family is present on this host and how to
    render and locate that family's autorun script. Ancestry is assigned by
    the registry from its static registration table, not derived from the
    class hierarchy.
    """

    template_name: str | None = None
    default_install_dir: str | None = None
    template_replacements: dict[str, str] = {}

    def __init__(
        self,
        shorthand: str,
        ancestors: tuple[str, ...] = (),
        template_path: Path | None = None,
        install_dir: Path | None = None,
    ):
        if not shorthand:
            raise ValueError("Driver shorthand must not be empty")
        self.shorthand = shorthand
        self.ancestors = tuple(ancestors)
        if template_path is None and self.template_name:
            template_path = TEMPLATE_DIR / self.template_name
        self.template_path = template_path
        if install_dir is None and self.default_install_dir:
            install_dir = Path(self.default_install_dir)
        self.install_dir = install_dir
        self.template_replacements = dict(self.template_replacements)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.shorthand} ancestors={list(self.ancestors)}>"

    @property
    def specificity(self) -> int:
        return len(self.ancestors)

    def get_details(self) -> DriverDetails:
        return DriverDetails(shorthand=self.shorthand, ancestors=self.ancestors)

    @abstractmethod
    def is_installed(self) -> bool:
        """Check whether this OS family is the running host. Must never raise."""

    @abstractmethod
    def get_autorun_script(self, descriptor: AppDescriptor, strict: bool = False) -> bytes:
        """Render the autorun script for *descriptor*."""

    def get_autorun_template(self) -> bytes:
        if not self.template_path:
            raise ConfigError(f"No template path configured for driver {self.shorthand}")
        path = Path(self.template_path)
        if not path.is_file():
            raise TemplateMissingError(f"Template path {path} does not exist")
        return path.read_bytes()

    def render_template(
        self,
        descriptor: AppDescriptor,
        strict: bool = False,
        fields: dict[str, str] | None = None,
    ) -> bytes:
        """Fill this driver's template with descriptor fields and its own tokens.

        *fields* replaces the descriptor's own placeholder values, for drivers
        that need them escaped.
        """
        logger.debug(f"Rendering {self.template_path} for {descriptor.app_name} ({self.shorthand})")
        return template.render(
            self.get_autorun_template(),
            descriptor.placeholders() if fields is None else fields,
            self.template_replacements,
            strict=strict,
        )

    def get_autorun_path(self, app_name: str) -> Path:
        if not self.install_dir:
            raise ConfigError(f"No install directory configured for driver {self.shorthand}")

        separators = {os.sep, os.altsep, "/"} - {None}
        if app_name in ("", ".", "..") or any(sep in app_name for sep in separators):
            raise PathError(
                f"appName '{app_name}' must be a plain file name inside {self.install_dir}",
                path=Path(self.install_dir),
            )

        path = Path(self.install_dir) / app_name
        parent = path.parent

        if not parent.is_dir():
            raise PathError(
                f"Directory: '{parent}' does not exist. How can this be a correct path?",
                path=parent,
            )
        if not os.access(parent, os.W_OK):
            raise PathError(f"Directory: '{parent}' is not writable. Maybe run as root?", path=parent)

        return path

    def write_autorun(
        self,
        descriptor: AppDescriptor | dict[str, Any],
        overwrite: bool = False,
        *,
        mode: int = DEFAULT_MODE,
        strict: bool = False,
    ) -> AutoRunResult:
        """Validate, render and install the autorun script. See AutoRunInstaller."""
        installer = AutoRunInstaller(self, mode=mode, strict=strict)
        return installer.write_autorun(descriptor, overwrite=overwrite)


def marker_exists(path: Path) -> bool:
    try:
        return path.exists()
    except OSError as e:
        logger.debug(f"Probe marker {path} not accessible: {e}")
        return False


def read_marker(path: Path) -> str | None:
    """Return the text of a probe marker file, or None if it cannot be read."""
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.debug(f"Probe marker {path} unreadable: {e}")
        return None


def parse_os_release(text: str) -> dict[str, str]:
    """Parse /etc/os-release style KEY=value lines."""
    result: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        result[key.strip()] = value.strip().strip("\"'")
    return result

"""Validate, render and install autorun scripts."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any

from loguru import logger

from daemonforge.autorun.descriptor import AppDescriptor, validate_descriptor
from daemonforge.errors import AutoRunFailed, DaemonForgeError, FileModeError, PathError, WriteError

if TYPE_CHECKING:
    from daemonforge.drivers.base import Driver

# World read/write/execute so the script works under whichever user the
# service manager runs it as. Narrow it through config if that is too loose.
DEFAULT_MODE = 0o777


@dataclass
class AutoRunResult:
    path: Path | None = None
    errors: list[DaemonForgeError] = field(default_factory=list)
    written: bool = False

    @property
    def ok(self) -> bool:
        return not self.errors

    def messages(self) -> list[str]:
        return [str(e) for e in self.errors]

    def raise_for_errors(self) -> Path:
        """Return the installed path, or raise AutoRunFailed with every error."""
        if self.errors:
            raise AutoRunFailed(self.errors)
        if self.path is None:
            raise AutoRunFailed([PathError("No autorun path was resolved")])
        return self.path


def render_autorun(driver: Driver, descriptor: Any, strict: bool = False) -> bytes:
    """Validate *descriptor* and render the driver's script without writing it.

    Raises AutoRunFailed when validation fails, or the driver's own error.
    """
    valid, errors = validate_descriptor(descriptor)
    if errors:
        raise AutoRunFailed(errors)
    return driver.get_autorun_script(valid, strict=strict)


class AutoRunInstaller:
    """Installs one driver's autorun script.

    ``write_autorun`` never raises for expected failures; every error ends up
    in the returned AutoRunResult. Nothing is written unless validation,
    rendering and path resolution all succeed.
    """

    def __init__(self, driver: Driver, mode: int = DEFAULT_MODE, strict: bool = False):
        self.driver = driver
        self.mode = mode
        self.strict = strict

    def write_autorun(self, descriptor: AppDescriptor | dict[str, Any], overwrite: bool = False) -> AutoRunResult:
        valid, errors = validate_descriptor(descriptor)
        if errors:
            for error in errors:
                logger.debug(f"Descriptor rejected: {error}")
            return AutoRunResult(errors=errors)

        try:
            body = self.driver.get_autorun_script(valid, strict=self.strict)
            path = self.driver.get_autorun_path(valid.app_name)
        except DaemonForgeError as e:
            logger.debug(f"Autorun for {valid.app_name} failed on {self.driver.shorthand}: {e}")
            return AutoRunResult(errors=[e])

        if path.exists() and not path.is_file():
            return AutoRunResult(
                errors=[PathError(f"Startup file: '{path}' exists and is not a regular file", path=path)]
            )

        if path.exists() and not overwrite:
            logger.info(f"Autorun script {path} already exists, leaving it in place")
            return AutoRunResult(path=path)

        try:
            path.write_bytes(body)
        except OSError as e:
            return AutoRunResult(
                errors=[WriteError(f"Startup file: '{path}' cannot be written to: {e}", path=path)]
            )

        try:
            os.chmod(path, self.mode)
        except OSError as e:
            return AutoRunResult(
                path=path,
                written=True,
                errors=[FileModeError(f"Startup file: '{path}' cannot be chmodded: {e}", path=path)],
            )

        logger.info(f"Installed autorun script {path} (mode {self.mode:o})")
        return AutoRunResult(path=path, written=True)

"""Application descriptor model and validation."""

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from daemonforge.errors import DaemonForgeError, PathError, ValidationError

REQUIRED_FIELDS = (
    "appName",
    "appExecutable",
    "appDescription",
    "appDir",
    "authorName",
    "authorEmail",
)


class AppDescriptor(BaseModel):
    """Describes the application an autorun script is forged for.

    Field names are snake_case in Python and camelCase on the wire and in
    templates (``{{appName}}``).
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    app_name: str = Field(min_length=1)
    app_executable: str = Field(min_length=1)
    app_description: str = Field(min_length=1)
    app_dir: str = Field(min_length=1)
    author_name: str = Field(min_length=1)
    author_email: str = Field(min_length=1)

    @property
    def executable_path(self) -> Path:
        return Path(self.app_dir) / self.app_executable

    def placeholders(self) -> dict[str, str]:
        """Map of camelCase field name to value."""
        return self.model_dump(by_alias=True)


def _field_error(error: dict[str, Any]) -> ValidationError:
    field = str(error["loc"][0]) if error.get("loc") else None
    if error["type"] == "missing":
        message = f"Cannot forge an autorun script without a valid daemon property: {field}"
    else:
        message = f"Invalid daemon property {field}: {error['msg']}"
    return ValidationError(message, field=field)


def _field_name(alias: str) -> str:
    for name, info in AppDescriptor.model_fields.items():
        if info.alias == alias:
            return name
    return alias


def _raw_value(data: Mapping, alias: str) -> str | None:
    value = data.get(alias, data.get(_field_name(alias)))
    return value if isinstance(value, str) and value else None


def check_executable(path: Path) -> PathError | None:
    """Return a PathError if *path* is missing or not executable, else None."""
    if not path.exists():
        return PathError(
            f"Unable to forge autorun script for non-existing daemon file: {path}, "
            "try setting a valid appDir or appExecutable",
            path=path,
        )
    if not path.is_file() or not os.access(path, os.X_OK):
        return PathError(
            f"Unable to forge autorun script: daemon file {path} needs to be executable first",
            path=path,
        )
    return None


def validate_descriptor(data: Any) -> tuple[AppDescriptor | None, list[DaemonForgeError]]:
    """Validate a descriptor mapping, collecting every field error.

    Returns ``(descriptor, [])`` on success and ``(None, errors)`` otherwise.
    Field errors accumulate; the executable checks run afterwards whenever
    ``appDir`` and ``appExecutable`` are themselves valid, and stop at the
    first failure.
    """
    if isinstance(data, AppDescriptor):
        descriptor: AppDescriptor | None = data
        errors: list[DaemonForgeError] = []
        executable = data.executable_path
    elif not isinstance(data, Mapping):
        return None, [ValidationError("No properties to forge an autorun script")]
    else:
        errors = []
        try:
            descriptor = AppDescriptor.model_validate(dict(data))
        except PydanticValidationError as e:
            descriptor = None
            errors.extend(_field_error(err) for err in e.errors())

        if descriptor is not None:
            executable = descriptor.executable_path
        else:
            app_dir = _raw_value(data, "appDir")
            app_executable = _raw_value(data, "appExecutable")
            executable = Path(app_dir) / app_executable if app_dir and app_executable else None

    if executable is not None:
        path_error = check_executable(executable)
        if path_error is not None:
            errors.append(path_error)

    if errors:
        return None, errors
    return descriptor, errors

"""Configuration schema using Pydantic."""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class DriverOverride(BaseModel):
    """Per-driver location overrides, keyed by driver shorthand."""
    template_path: str | None = None
    install_dir: str | None = None


class DriversConfig(BaseModel):
    """Driver location configuration."""
    template_dir: str | None = None  # Directory holding replacement templates, same file names
    install_dir: str | None = None  # Install dir for every driver, e.g. a staging root
    overrides: dict[str, DriverOverride] = Field(default_factory=dict)


class AutoRunConfig(BaseModel):
    """Autorun script installation settings.

    ``mode`` given as a string (config file, environment) is octal: "755",
    "0755" and "0o755" all mean 0o755. An integer is the mode value itself,
    so JSON 493 is 0o755 and JSON 755 is rejected as out of range.
    """
    mode: int = Field(default=0o777, ge=0, le=0o777)
    strict_placeholders: bool = False  # If true, unreplaced {{name}} placeholders fail rendering

    @field_validator("mode", mode="before")
    @classmethod
    def parse_octal_mode(cls, value):
        if isinstance(value, str):
            text = value.strip().lower().removeprefix("0o")
            try:
                return int(text, 8)
            except ValueError:
                raise ValueError(f"mode must be an octal string like '755', got {value!r}") from None
        return value


class Config(BaseSettings):
    """Root configuration for daemonforge."""
    drivers: DriversConfig = Field(default_factory=DriversConfig)
    autorun: AutoRunConfig = Field(default_factory=AutoRunConfig)

    model_config = SettingsConfigDict(
        env_prefix="DAEMONFORGE_",
        env_nested_delimiter="__",
    )

    def override_for(self, shorthand: str) -> DriverOverride:
        """Return the effective overrides for a driver (case-insensitive shorthand)."""
        for name, override in self.drivers.overrides.items():
            if name.lower() == shorthand.lower():
                return override
        return DriverOverride()

    def template_path_for(self, shorthand: str, template_name: str | None) -> Path | None:
        """Resolve a driver's template path, or None to keep its built-in default."""
        override = self.override_for(shorthand)
        if override.template_path:
            return Path(override.template_path).expanduser()
        if self.drivers.template_dir and template_name:
            return Path(self.drivers.template_dir).expanduser() / template_name
        return None

    def install_dir_for(self, shorthand: str) -> Path | None:
        """Resolve a driver's install directory, or None to keep its built-in default."""
        override = self.override_for(shorthand)
        if override.install_dir:
            return Path(override.install_dir).expanduser()
        if self.drivers.install_dir:
            return Path(self.drivers.install_dir).expanduser()
        return None

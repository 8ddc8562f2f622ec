"""Tests for configuration schema and loading."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError as PydanticValidationError

from daemonforge.config.loader import camel_to_snake, convert_keys, load_config
from daemonforge.config.schema import AutoRunConfig, Config, DriverOverride


class TestConfigDefaults:
    def test_defaults(self):
        config = Config()
        assert config.autorun.mode == 0o777
        assert config.autorun.strict_placeholders is False
        assert config.drivers.install_dir is None
        assert config.drivers.overrides == {}

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("DAEMONFORGE_AUTORUN__MODE", "755")
        monkeypatch.setenv("DAEMONFORGE_AUTORUN__STRICT_PLACEHOLDERS", "true")
        config = Config()
        assert config.autorun.mode == 0o755
        assert config.autorun.strict_placeholders is True


class TestAutoRunMode:
    @pytest.mark.parametrize("text, expected", [
        ("755", 0o755),
        ("0755", 0o755),
        ("0o750", 0o750),
        ("644", 0o644),
    ])
    def test_env_strings_are_octal(self, monkeypatch, text, expected):
        monkeypatch.setenv("DAEMONFORGE_AUTORUN__MODE", text)
        assert Config().autorun.mode == expected

    def test_integer_is_mode_value(self):
        assert AutoRunConfig(mode=0o755).mode == 0o755
        assert AutoRunConfig(mode=493).mode == 0o755

    @pytest.mark.parametrize("value", ["9", "rwxr-xr-x", "1777", 755])
    def test_rejects_non_octal_or_out_of_range(self, value):
        with pytest.raises(PydanticValidationError):
            AutoRunConfig(mode=value)

    def test_bad_env_mode_is_an_error(self, monkeypatch):
        monkeypatch.setenv("DAEMONFORGE_AUTORUN__MODE", "9")
        with pytest.raises(PydanticValidationError):
            Config()


class TestResolution:
    def test_no_overrides_keeps_driver_defaults(self):
        config = Config()
        assert config.template_path_for("Debian", "debian.sh") is None
        assert config.install_dir_for("Debian") is None

    def test_per_driver_override_wins(self, tmp_path):
        config = Config()
        config.drivers.install_dir = "/srv/staging"
        config.drivers.template_dir = str(tmp_path)
        config.drivers.overrides = {
            "Ubuntu": DriverOverride(template_path="/custom/ubuntu.sh", install_dir="/custom/init.d"),
        }

        assert config.template_path_for("ubuntu", "debian.sh") == Path("/custom/ubuntu.sh")
        assert config.install_dir_for("UBUNTU") == Path("/custom/init.d")
        assert config.template_path_for("Debian", "debian.sh") == tmp_path / "debian.sh"
        assert config.install_dir_for("Debian") == Path("/srv/staging")

    def test_template_dir_needs_template_name(self, tmp_path):
        config = Config()
        config.drivers.template_dir = str(tmp_path)
        assert config.template_path_for("Custom", None) is None


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "config.json")
        assert config.autorun.mode == 0o777

    def test_camel_case_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({
            "autorun": {"mode": 0o750, "strictPlaceholders": True},
            "drivers": {
                "installDir": "/srv/init.d",
                "overrides": {"RedHat": {"templatePath": "/srv/redhat.sh"}},
            },
        }))

        config = load_config(path)

        assert config.autorun.mode == 0o750
        assert config.autorun.strict_placeholders is True
        assert config.drivers.install_dir == "/srv/init.d"
        assert config.drivers.overrides["RedHat"].template_path == "/srv/redhat.sh"

    def test_malformed_file_falls_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text("{not json")
        assert load_config(path).autorun.mode == 0o777

    def test_invalid_values_fall_back(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"autorun": {"mode": -1}}))
        assert load_config(path).autorun.mode == 0o777

    def test_octal_string_mode_in_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"autorun": {"mode": "755"}}))
        assert load_config(path).autorun.mode == 0o755

    def test_decimal_looking_mode_in_file_falls_back(self, tmp_path):
        # 755 as a JSON number is the decimal value, which is above 0o777.
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"autorun": {"mode": 755}}))
        assert load_config(path).autorun.mode == 0o777

    def test_directory_path_gives_defaults(self, tmp_path):
        config = load_config(tmp_path)
        assert config.autorun.mode == 0o777
        assert config.drivers.overrides == {}


class TestKeyConversion:
    def test_camel_to_snake(self):
        assert camel_to_snake("strictPlaceholders") == "strict_placeholders"
        assert camel_to_snake("mode") == "mode"

    def test_override_names_preserved(self):
        data = {"overrides": {"RedHat": {"installDir": "/x"}}}
        assert convert_keys(data) == {"overrides": {"RedHat": {"install_dir": "/x"}}}

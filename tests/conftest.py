"""Shared fixtures for daemonforge tests."""

import pytest

from daemonforge.drivers.base import Driver

SCENARIO_TEMPLATE = b"#!/bin/sh\n# {{appDescription}} by {{authorName}}\nexec {{appDir}}/{{appExecutable}}"


class StubDriver(Driver):
    """Driver whose installed state is set by the test."""

    def __init__(self, shorthand, ancestors=(), installed=True, **kwargs):
        super().__init__(shorthand, ancestors, **kwargs)
        self.installed = installed

    def is_installed(self) -> bool:
        return self.installed

    def get_autorun_script(self, descriptor, strict=False):
        return self.render_template(descriptor, strict=strict)


@pytest.fixture
def stub_driver_cls():
    return StubDriver


@pytest.fixture
def app_dir(tmp_path):
    path = tmp_path / "opt" / "myd"
    path.mkdir(parents=True)
    exe = path / "myd.sh"
    exe.write_text("#!/bin/sh\n")
    exe.chmod(0o755)
    return path


@pytest.fixture
def descriptor(app_dir):
    return {
        "appName": "myd",
        "appExecutable": "myd.sh",
        "appDir": str(app_dir),
        "appDescription": "test",
        "authorName": "A",
        "authorEmail": "a@x.com",
    }


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "template.sh"
    path.write_bytes(SCENARIO_TEMPLATE)
    return path


@pytest.fixture
def install_dir(tmp_path):
    path = tmp_path / "etc" / "init.d"
    path.mkdir(parents=True)
    return path


@pytest.fixture
def driver(template_file, install_dir):
    return StubDriver(
        "Stub",
        ("Linux",),
        template_path=template_file,
        install_dir=install_dir,
    )

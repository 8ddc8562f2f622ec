"""Debian-family drivers: LSB init scripts using start-stop-daemon."""

from pathlib import Path

from daemonforge.drivers.base import marker_exists, parse_os_release, read_marker
from daemonforge.drivers.linux import LinuxDriver


class DebianDriver(LinuxDriver):
    template_name = "debian.sh"
    marker_path = Path("/etc/debian_version")

    def is_installed(self) -> bool:
        return super().is_installed() and marker_exists(self.marker_path)


class UbuntuDriver(DebianDriver):
    lsb_release_path = Path("/etc/lsb-release")

    def is_installed(self) -> bool:
        if not super().is_installed():
            return False
        if self.os_release().get("ID", "").lower() == "ubuntu":
            return True
        # Older releases ship no os-release
        text = read_marker(self.lsb_release_path)
        return bool(text) and parse_os_release(text).get("DISTRIB_ID", "").lower() == "ubuntu"

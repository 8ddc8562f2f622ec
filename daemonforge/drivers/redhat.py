"""RedHat-family drivers: chkconfig-style init scripts."""

from pathlib import Path

from daemonforge.drivers.base import marker_exists
from daemonforge.drivers.linux import LinuxDriver


class RedHatDriver(LinuxDriver):
    template_name = "redhat.sh"
    marker_path = Path("/etc/redhat-release")

    def is_installed(self) -> bool:
        return super().is_installed() and marker_exists(self.marker_path)


class CentOSDriver(RedHatDriver):
    marker_path = Path("/etc/centos-release")


class FedoraDriver(RedHatDriver):
    marker_path = Path("/etc/fedora-release")

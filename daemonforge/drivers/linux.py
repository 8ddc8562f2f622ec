"""Generic Linux driver: SysV init scripts in /etc/init.d."""

import sys
from pathlib import Path

from daemonforge.autorun.descriptor import AppDescriptor
from daemonforge.drivers.base import Driver, parse_os_release, read_marker

OS_RELEASE_PATH = Path("/etc/os-release")

INIT_REPLACEMENTS = {
    "@name@": "{{appName}}",
    "@desc@": "{{appDescription}}",
    "@author_name@": "{{authorName}}",
    "@author_email@": "{{authorEmail}}",
    "@app_dir@": "{{appDir}}",
    "@bin_name@": "{{appExecutable}}",
    "@bin_file@": "{{appDir}}/{{appExecutable}}",
}


class LinuxDriver(Driver):
    template_name = "linux.sh"
    default_install_dir = "/etc/init.d"
    template_replacements = INIT_REPLACEMENTS

    os_release_path = OS_RELEASE_PATH

    def is_installed(self) -> bool:
        return sys.platform.startswith("linux")

    def get_autorun_script(self, descriptor: AppDescriptor, strict: bool = False) -> bytes:
        return self.render_template(descriptor, strict=strict)

    def os_release(self) -> dict[str, str]:
        """Fields of /etc/os-release, empty when it cannot be read."""
        text = read_marker(self.os_release_path)
        return parse_os_release(text) if text else {}

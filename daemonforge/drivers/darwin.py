"""macOS driver: launchd property lists in /Library/LaunchDaemons."""

import sys
from xml.sax.saxutils import escape

from daemonforge.autorun.descriptor import AppDescriptor
from daemonforge.drivers.base import Driver

LABEL_PREFIX = "org.daemonforge"


class DarwinDriver(Driver):
    template_name = "darwin.plist"
    default_install_dir = "/Library/LaunchDaemons"
    template_replacements = {
        "@label@": LABEL_PREFIX + ".{{appName}}",
        "@bin_file@": "{{appDir}}/{{appExecutable}}",
    }

    def is_installed(self) -> bool:
        return sys.platform == "darwin"

    def get_autorun_script(self, descriptor: AppDescriptor, strict: bool = False) -> bytes:
        # Values land inside XML <string> elements
        fields = {name: escape(value) for name, value in descriptor.placeholders().items()}
        return self.render_template(descriptor, strict=strict, fields=fields)

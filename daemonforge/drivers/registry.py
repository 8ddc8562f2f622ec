"""Static driver registration table and discovery."""

import importlib
from dataclasses import dataclass

from loguru import logger

from daemonforge.config.schema import Config
from daemonforge.drivers.base import Driver
from daemonforge.errors import DiscoveryError, EmptyRegistryError


@dataclass(frozen=True)
class DriverEntry:
    shorthand: str
    target: str  # "package.module:ClassName"
    parent: str | None = None


# Discovery order doubles as the tie-break order for equally specific drivers.
DRIVERS: tuple[DriverEntry, ...] = (
    DriverEntry("Linux", "daemonforge.drivers.linux:LinuxDriver"),
    DriverEntry("Debian", "daemonforge.drivers.debian:DebianDriver", parent="Linux"),
    DriverEntry("Ubuntu", "daemonforge.drivers.debian:UbuntuDriver", parent="Debian"),
    DriverEntry("RedHat", "daemonforge.drivers.redhat:RedHatDriver", parent="Linux"),
    DriverEntry("CentOS", "daemonforge.drivers.redhat:CentOSDriver", parent="RedHat"),
    DriverEntry("Fedora", "daemonforge.drivers.redhat:FedoraDriver", parent="RedHat"),
    DriverEntry("Darwin", "daemonforge.drivers.darwin:DarwinDriver"),
)


def ancestry(shorthand: str, entries: tuple[DriverEntry, ...] = DRIVERS) -> tuple[str, ...]:
    """Return the parent chain of *shorthand*, nearest parent first.

    Raises:
        DiscoveryError: If a parent is not registered or the chain loops.
    """
    by_name = {e.shorthand: e for e in entries}
    if shorthand not in by_name:
        raise DiscoveryError(f"Driver {shorthand} is not registered")

    chain: list[str] = []
    parent = by_name[shorthand].parent
    while parent is not None:
        if parent == shorthand or parent in chain:
            raise DiscoveryError(f"Driver {shorthand} has a cyclic parent chain via {parent}")
        if parent not in by_name:
            raise DiscoveryError(f"Driver {shorthand} declares unknown parent {parent}")
        chain.append(parent)
        parent = by_name[parent].parent
    return tuple(chain)


def _import_target(entry: DriverEntry) -> type[Driver]:
    module_name, _, class_name = entry.target.partition(":")
    if not module_name or not class_name:
        raise DiscoveryError(f"Driver {entry.shorthand} has malformed target '{entry.target}'")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise DiscoveryError(f"Driver {entry.shorthand}: module {module_name} does not exist") from e

    cls = getattr(module, class_name, None)
    if cls is None:
        raise DiscoveryError(f"Driver {entry.shorthand}: class {entry.target} does not exist")
    if not (isinstance(cls, type) and issubclass(cls, Driver)):
        raise DiscoveryError(f"Driver {entry.shorthand}: {entry.target} is not a Driver")
    return cls


def load_driver(
    entry: DriverEntry,
    entries: tuple[DriverEntry, ...] = DRIVERS,
    config: Config | None = None,
) -> Driver:
    """Import and construct the driver for one registration entry."""
    cls = _import_target(entry)
    config = config or Config()
    try:
        return cls(
            entry.shorthand,
            ancestry(entry.shorthand, entries),
            template_path=config.template_path_for(entry.shorthand, cls.template_name),
            install_dir=config.install_dir_for(entry.shorthand),
        )
    except (TypeError, ValueError) as e:
        raise DiscoveryError(f"Driver {entry.shorthand} cannot be constructed: {e}") from e


def construct_all(
    entries: tuple[DriverEntry, ...] = DRIVERS,
    config: Config | None = None,
) -> list[Driver]:
    """Construct every registered driver in table order."""
    drivers = [load_driver(entry, entries, config) for entry in entries]
    if not drivers:
        raise EmptyRegistryError("Driver registry is empty; no drivers could be constructed")
    return drivers


def discover(
    entries: tuple[DriverEntry, ...] = DRIVERS,
    config: Config | None = None,
) -> list[Driver]:
    """Return the registered drivers that report themselves installed, in table order."""
    installed = []
    for driver in construct_all(entries, config):
        if driver.is_installed():
            logger.debug(f"Driver {driver.shorthand} is installed (specificity {driver.specificity})")
            installed.append(driver)
        else:
            logger.debug(f"Driver {driver.shorthand} is not installed")
    return installed

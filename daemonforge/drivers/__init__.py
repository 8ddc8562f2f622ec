"""OS driver discovery: factory and re-exports."""

from loguru import logger

from daemonforge.config.schema import Config
from daemonforge.drivers.base import Driver, DriverDetails
from daemonforge.drivers.registry import DRIVERS, DriverEntry, discover
from daemonforge.drivers.resolve import most_specific

__all__ = [
    "DRIVERS",
    "Driver",
    "DriverDetails",
    "DriverEntry",
    "discover_driver",
]


def discover_driver(
    config: Config | None = None,
    entries: tuple[DriverEntry, ...] = DRIVERS,
) -> Driver:
    """Return the most specific driver installed on this host."""
    driver = most_specific(discover(entries, config))
    logger.info(f"Using {driver.shorthand} driver (ancestors: {', '.join(driver.ancestors) or 'none'})")
    return driver

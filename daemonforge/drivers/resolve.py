"""Pick the most specific installed driver."""

from collections.abc import Iterable

from daemonforge.drivers.base import Driver
from daemonforge.errors import NoCompatibleDriverError


def specificity(driver: Driver) -> int:
    """Ancestry chain length; Ubuntu > Debian > Linux."""
    return len(driver.get_details().ancestors)


def most_specific(candidates: Iterable[Driver]) -> Driver:
    """Return the candidate with the highest specificity.

    Ties go to the candidate seen first, so passing drivers in discovery
    order makes the choice deterministic.

    Raises:
        NoCompatibleDriverError: If there are no candidates.
    """
    best: Driver | None = None
    best_weight = -1
    for driver in candidates:
        weight = specificity(driver)
        if weight > best_weight:
            best, best_weight = driver, weight
    if best is None:
        raise NoCompatibleDriverError("No compatible driver is installed on this host")
    return best

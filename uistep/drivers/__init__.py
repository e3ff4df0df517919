from uistep.drivers.base import Driver, ElementHandle, QueryHandle
from uistep.drivers.browser import PlaywrightDriver, UnsupportedPredicateError
from uistep.drivers.sim import SimDriver, SimElement

__all__ = [
    "Driver",
    "ElementHandle",
    "PlaywrightDriver",
    "QueryHandle",
    "SimDriver",
    "SimElement",
    "UnsupportedPredicateError",
]

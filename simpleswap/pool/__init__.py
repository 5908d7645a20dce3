"""Pool package.

Provides Pool, the two-asset constant product pool, and its state types.
"""

from .orientation import Orientation
from .pool import Pool
from .state import PoolState, ShareLedger

__all__ = [
    "Orientation",
    "Pool",
    "PoolState",
    "ShareLedger",
]

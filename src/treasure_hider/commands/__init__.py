"""treasure-hider commands."""

from .bury import BuryOptions, BuryResult, bury
from .dig import DigOptions, DigResult, dig

__all__ = ["BuryOptions", "BuryResult", "bury", "DigOptions", "DigResult", "dig"]

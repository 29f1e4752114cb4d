"""Means-of-death codes emitted on ``Kill:`` lines.

The server logs the cause of every death as a small integer; the third
number on a ``Kill:`` line.  Values follow the game's ``meansOfDeath_t``
table, so ``MeansOfDeath(7).name == "MOD_ROCKET_SPLASH"``.

Unknown codes (mods, newer engines) resolve to ``MOD_UNKNOWN`` instead of
raising, so a single odd line never stops a parse.
"""

from enum import IntEnum


class MeansOfDeath(IntEnum):
    """Closed set of causes of death, keyed by the numeric log code."""

    MOD_UNKNOWN = 0
    MOD_SHOTGUN = 1
    MOD_GAUNTLET = 2
    MOD_MACHINEGUN = 3
    MOD_GRENADE = 4
    MOD_GRENADE_SPLASH = 5
    MOD_ROCKET = 6
    MOD_ROCKET_SPLASH = 7
    MOD_PLASMA = 8
    MOD_PLASMA_SPLASH = 9
    MOD_RAILGUN = 10
    MOD_LIGHTNING = 11
    MOD_BFG = 12
    MOD_BFG_SPLASH = 13
    MOD_WATER = 14
    MOD_SLIME = 15
    MOD_LAVA = 16
    MOD_CRUSH = 17
    MOD_TELEFRAG = 18
    MOD_FALLING = 19
    MOD_SUICIDE = 20
    MOD_TARGET_LASER = 21
    MOD_TRIGGER_HURT = 22
    MOD_NAIL = 23
    MOD_CHAINGUN = 24
    MOD_PROXIMITY_MINE = 25
    MOD_KAMIKAZE = 26
    MOD_JUICED = 27
    MOD_GRAPPLE = 28

    @classmethod
    def _missing_(cls, value):
        return cls.MOD_UNKNOWN

    @classmethod
    def from_code(cls, code: int | str) -> "MeansOfDeath":
        """Resolve a numeric code (int or digit string) to a member.

        Raises:
            ValueError: If ``code`` is a string that is not an integer.
        """
        return cls(int(code))

    @property
    def label(self) -> str:
        """Human-readable cause, e.g. ``"rocket splash"``."""
        return self.name.removeprefix("MOD_").replace("_", " ").lower()


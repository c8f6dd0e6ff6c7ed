"""Enumerations of the Person resource.

Member declaration order is significant: it defines the ordinal used by
ordering filters (``hairColor[lt]=ORANGE``) and by statistics output.
"""

from __future__ import annotations

from enum import Enum


class Color(str, Enum):
    GREEN = "GREEN"
    BLUE = "BLUE"
    ORANGE = "ORANGE"
    BROWN = "BROWN"


class Country(str, Enum):
    FRANCE = "FRANCE"
    SPAIN = "SPAIN"
    INDIA = "INDIA"
    THAILAND = "THAILAND"
    SOUTH_KOREA = "SOUTH_KOREA"

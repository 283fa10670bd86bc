# jsonbind/interfaces/types.py
# Copyright (c) 2024 Brad Edwards
# Licensed under the MIT License - see LICENSE file for details
from enum import Enum, auto
from typing import Any, Callable, Dict, Tuple

CacheKey = str
LookupKey = Tuple[str, type]
TypeLookup = Dict[LookupKey, Any]


class Direction(Enum):
    """Which way a descriptor moves values."""

    DECODE = auto()  # JSON -> object
    ENCODE = auto()  # object -> JSON


# Codec callables are opaque to the binding engine
Decoder = Callable[..., Any]
Encoder = Callable[..., Any]

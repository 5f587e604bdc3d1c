# src/utils.py
"""
Shared utilities: cache key derivation, value comparison, map transforms.
"""

import hashlib
import logging
from typing import Any, Callable, Dict, Mapping, Optional, Tuple, TypeVar

import numpy as np
from PIL import Image

logging.basicConfig(level=logging.INFO)

K = TypeVar("K")
V = TypeVar("V")
R = TypeVar("R")


def map_not_none_values(mapping: Mapping[K, V], transform: Callable[[K, V], Optional[R]]) -> Dict[K, R]:
    """Return a new dict of transformed values, dropping keys that map to None."""
    result = {}
    for key, value in mapping.items():
        mapped = transform(key, value)
        if mapped is not None:
            result[key] = mapped
    return result


def _digest(*parts: bytes) -> str:
    m = hashlib.sha256()
    for part in parts:
        m.update(part)
    return m.hexdigest()


def default_cache_key(value: Any) -> Optional[str]:
    """
    Derive the cache key a parameter gets when none is given explicitly.
    Usually this is just str(value). Arrays and images are digested instead:
    numpy truncates large arrays in str() and PIL prints the object address,
    neither of which identifies the pixels.
    """
    if value is None:
        return None
    if isinstance(value, np.ndarray):
        data = np.ascontiguousarray(value)
        return f"ndarray:{data.dtype}:{data.shape}:{_digest(data.tobytes())}"
    if isinstance(value, Image.Image):
        # Palette images store indices; the palette decides the colours.
        palette = value.getpalette()
        palette_bytes = bytes(palette) if palette is not None else b""
        return f"image:{value.mode}:{value.size}:{_digest(value.tobytes(), palette_bytes)}"
    try:
        key = str(value)
    except Exception as e:
        logging.error(f"Failed to derive cache key from {type(value).__name__}: {e}")
        return None
    if " at 0x" in key:
        logging.warning(f"Cache key for {type(value).__name__} contains an object address: {key}")
    return key


def values_equal(a: Any, b: Any) -> bool:
    if a is b:
        return True
    if isinstance(a, np.ndarray) or isinstance(b, np.ndarray):
        return np.array_equal(a, b)
    if isinstance(a, list) and isinstance(b, list) or isinstance(a, tuple) and isinstance(b, tuple):
        return len(a) == len(b) and all(values_equal(x, y) for x, y in zip(a, b))
    if isinstance(a, dict) and isinstance(b, dict):
        return a.keys() == b.keys() and all(values_equal(a[k], b[k]) for k in a)
    try:
        return bool(a == b)
    except ValueError:
        # Objects wrapping arrays whose == has no single truth value.
        return False


def make_cache_key(base: Any, size: Optional[Tuple[int, int]] = None,
                   parameters: Optional[Mapping[str, str]] = None) -> str:
    # Parameter order does not change identity.
    m = hashlib.sha256()
    m.update(str(base).encode())
    m.update(str(size).encode())
    if parameters:
        m.update(str(sorted(parameters.items())).encode())
    return m.hexdigest()

# src/parameters.py
"""
Immutable request parameters passed to fetchers and decoders.
"""

from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from src.utils import default_cache_key, map_not_none_values, values_equal

# Default for Builder.set: derive the cache key from the value.
DERIVE = object()


class Entry:
    __slots__ = ("_value", "_cache_key")

    def __init__(self, value: Any, cache_key: Optional[str]):
        object.__setattr__(self, "_value", value)
        object.__setattr__(self, "_cache_key", cache_key)

    @property
    def value(self) -> Any:
        return self._value

    @property
    def cache_key(self) -> Optional[str]:
        return self._cache_key

    def __setattr__(self, name, value):
        raise AttributeError("Entry is immutable")

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Entry):
            return NotImplemented
        return self._cache_key == other._cache_key and values_equal(self._value, other._value)

    def __hash__(self):
        # Values may be unhashable (lists, arrays); equal entries always share a cache key.
        return hash((Entry, self._cache_key))

    def __reduce__(self):
        return (Entry, (self._value, self._cache_key))

    def __iter__(self):
        return iter((self._value, self._cache_key))

    def __repr__(self):
        return f"Entry(value={self._value!r}, cache_key={self._cache_key!r})"


class Parameters:
    """
    A map of generic values that fetchers and decoders read by key.

    Each value carries an optional cache key. Only entries with a cache key
    take part in the owning request's cache identity. Instances never change;
    use new_builder() to get a modified copy.
    """

    EMPTY: "Parameters"

    def __init__(self, entries: Optional[Mapping[str, Entry]] = None):
        self._map: Dict[str, Entry] = dict(entries) if entries else {}

    def value(self, key: str) -> Any:
        """Returns the value associated with key or None if key has no mapping."""
        entry = self._map.get(key)
        return entry.value if entry is not None else None

    def cache_key(self, key: str) -> Optional[str]:
        """Returns the cache key associated with key or None if key has no mapping."""
        entry = self._map.get(key)
        return entry.cache_key if entry is not None else None

    def entry(self, key: str) -> Optional[Entry]:
        return self._map.get(key)

    def get(self, key: str, default: Any = None) -> Any:
        entry = self._map.get(key)
        return entry.value if entry is not None else default

    def count(self) -> int:
        return len(self._map)

    def is_empty(self) -> bool:
        return not self._map

    def is_not_empty(self) -> bool:
        return bool(self._map)

    def values(self) -> Dict[str, Any]:
        if self.is_empty():
            return {}
        return {key: entry.value for key, entry in self._map.items()}

    def cache_keys(self) -> Dict[str, str]:
        """Returns a map of keys to cache keys. Entries without a cache key are left out."""
        if self.is_empty():
            return {}
        return map_not_none_values(self._map, lambda key, entry: entry.cache_key)

    def new_builder(self) -> "Builder":
        return Builder(self)

    def __iter__(self) -> Iterator[Tuple[str, Entry]]:
        return iter(list(self._map.items()))

    def __len__(self) -> int:
        return len(self._map)

    def __contains__(self, key) -> bool:
        return key in self._map

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, Parameters):
            return NotImplemented
        return self._map == other._map

    def __hash__(self):
        return hash(frozenset(self._map.items()))

    def __repr__(self):
        return f"Parameters({self._map!r})"


class Builder:

    def __init__(self, parameters: Optional[Parameters] = None):
        self._map: Dict[str, Entry] = dict(parameters._map) if parameters is not None else {}

    def set(self, key: str, value: Any, cache_key: Any = DERIVE) -> "Builder":
        """
        Set a parameter.

        :param key: The parameter's key.
        :param value: The parameter's value.
        :param cache_key: The parameter's cache key. Defaults to the string form
            of value. Pass None to keep the parameter out of the request's cache key.
        """
        if cache_key is DERIVE:
            cache_key = default_cache_key(value)
        self._map[key] = Entry(value, cache_key)
        return self

    def remove(self, key: str) -> "Builder":
        self._map.pop(key, None)
        return self

    def build(self) -> Parameters:
        return Parameters(self._map)


Parameters.Builder = Builder
Parameters.EMPTY = Parameters()

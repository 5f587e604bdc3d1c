# src/request.py
"""
Image requests: the source to load plus the parameters that travel with it.
"""

from typing import Any, Optional, Tuple

from src.parameters import DERIVE, Parameters
from src.utils import make_cache_key, values_equal


def _check_size(width: int, height: int) -> None:
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid size {width}x{height}: dimensions must be positive")


class ImageRequest:

    def __init__(self, data: Any, size: Optional[Tuple[int, int]] = None,
                 parameters: Parameters = Parameters.EMPTY):
        if size is not None:
            _check_size(*size)
        self._data = data
        self._size = size
        self._parameters = parameters

    @property
    def data(self) -> Any:
        return self._data

    @property
    def size(self) -> Optional[Tuple[int, int]]:
        return self._size

    @property
    def parameters(self) -> Parameters:
        return self._parameters

    def cache_key(self) -> str:
        """
        Key under which the loaded image is cached. Built from the data, the
        target size and every parameter that has a cache key.
        """
        return make_cache_key(self._data, self._size, self._parameters.cache_keys())

    def new_builder(self) -> "ImageRequest.Builder":
        return ImageRequest.Builder(self)

    def __eq__(self, other):
        if self is other:
            return True
        if not isinstance(other, ImageRequest):
            return NotImplemented
        return (values_equal(self._data, other._data) and self._size == other._size
                and self._parameters == other._parameters)

    def __hash__(self):
        return hash((self._size, self._parameters))

    def __repr__(self):
        return f"ImageRequest(data={self._data!r}, size={self._size!r}, parameters={self._parameters!r})"

    class Builder:

        def __init__(self, request: Optional["ImageRequest"] = None):
            if request is None:
                self._data = None
                self._size = None
                self._parameters = Parameters.EMPTY
            else:
                self._data = request.data
                self._size = request.size
                self._parameters = request.parameters
            # Created on first edit so untouched requests share their Parameters.
            self._parameters_builder: Optional[Parameters.Builder] = None

        def data(self, data: Any) -> "ImageRequest.Builder":
            self._data = data
            return self

        def size(self, width: int, height: int) -> "ImageRequest.Builder":
            _check_size(width, height)
            self._size = (width, height)
            return self

        def parameters(self, parameters: Parameters) -> "ImageRequest.Builder":
            self._parameters = parameters
            self._parameters_builder = None
            return self

        def set_parameter(self, key: str, value: Any, cache_key: Any = DERIVE) -> "ImageRequest.Builder":
            if self._parameters_builder is None:
                self._parameters_builder = self._parameters.new_builder()
            self._parameters_builder.set(key, value, cache_key)
            return self

        def remove_parameter(self, key: str) -> "ImageRequest.Builder":
            if self._parameters_builder is None:
                self._parameters_builder = self._parameters.new_builder()
            self._parameters_builder.remove(key)
            return self

        def build(self) -> "ImageRequest":
            if self._parameters_builder is not None:
                parameters = self._parameters_builder.build()
            else:
                parameters = self._parameters
            return ImageRequest(self._data, self._size, parameters)

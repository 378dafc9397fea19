"""Strided integer sequences.

A :class:`Range` is both an index sequence (used to build slices) and a
read-only ``1 x n`` integer matrix.
"""

from typing import Any, Iterator, Optional

from .._errors import InvalidArgumentError, UnsupportedMutationError
from ._backend import Backend
from ._dtypes import INT
from ._indexer import check_linear, slice_index
from ._matrix import Matrix

__all__ = [
    'Range',
]


class Range(Matrix):
    """
    ``start, start + step, ...`` up to but excluding ``end``.

    Args:
        start: First value, or the end when it is the only argument.
        end: Exclusive bound.
        step: Non-zero distance between values.

    Example:
        >>> list(Range(0, 6, 2))
        [0, 2, 4]
        >>> Range(3).shape
        (1, 3)
    """

    _backend = Backend.RANGE

    def __init__(self, start: int, end: Optional[int] = None, step: int = 1):
        if end is None:
            start, end = 0, start
        if step == 0:
            raise InvalidArgumentError("range step must not be zero")
        self._range = range(start, end, step)
        super().__init__(1, len(self._range), INT)

    @classmethod
    def of(cls, values: range) -> "Range":
        """Range equivalent to a builtin ``range``."""
        return cls(values.start, values.stop, values.step)

    @property
    def start(self) -> int:
        return self._range.start

    @property
    def end(self) -> int:
        return self._range.stop

    @property
    def step(self) -> int:
        return self._range.step

    def position(self, index: int, extent: int) -> int:
        """
        ``index``-th value, checked against this range and against the
        ``extent`` of the dimension it indexes.
        """
        check_linear(index, self._size)
        return slice_index(self._range.step, index, extent, self._range.start)

    def _get(self, index: int) -> int:
        return self._range[index]

    def _set(self, index: int, value: Any) -> None:
        raise UnsupportedMutationError("Range is read-only")

    def __contains__(self, value) -> bool:
        return value in self._range

    def __iter__(self) -> Iterator[int]:
        return iter(self._range)

    def __repr__(self) -> str:
        return f"Range({self.start}, {self.end}, {self.step})"

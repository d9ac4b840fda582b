"""Inclusive start/end selection over sorted listings."""

from typing import Callable, Sequence, TypeVar

from riprocess.errors import RangeNotFound

T = TypeVar("T")


def select_range(
    items: Sequence[T],
    key: Callable[[T], object],
    start=None,
    end=None,
    kind: str = "item",
) -> list[T]:
    """Return the contiguous run of ``items`` from ``start`` to ``end``.

    ``items`` must already be sorted ascending by ``key``. Both bounds are
    inclusive and must equal the key of an actual item; a bound left as None
    defaults to the first/last item. ``kind`` only names the items in error
    messages.
    """
    keys = [key(item) for item in items]
    for marker in (start, end):
        if marker is not None and marker not in keys:
            raise RangeNotFound(kind, marker)

    first = keys.index(start) if start is not None else 0
    last = keys.index(end) if end is not None else len(items) - 1
    return list(items[first:last + 1])

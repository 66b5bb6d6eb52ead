"""
Include list model.

An include is a path or URL naming one runtime file the bundle loads. The
list of includes of a bundle is an ordered set: load order matters.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class IncludeList:
    """Ordered set of include files.

    The order of first insertion is the load order; inserting a file already
    present does not move it.
    """

    def __init__(self, includes: Iterable[str] = ()) -> None:
        self._items: list[str] = []
        self.extend(includes)

    def add(self, include: str) -> bool:
        """Append an include unless already present.

        Returns:
            True if the include was appended.
        """
        if include in self._items:
            return False
        self._items.append(include)
        return True

    def extend(self, includes: Iterable[str]) -> None:
        for include in includes:
            self.add(include)

    def remove_matching(self, markers: Iterable[str]) -> list[str]:
        """Remove every include containing one of the markers.

        Returns:
            The removed includes, in their previous order.
        """
        markers = tuple(markers)
        removed = [item for item in self._items if any(marker in item for marker in markers)]
        if removed:
            self._items = [item for item in self._items if item not in removed]
        return removed

    def remove(self, include: str) -> bool:
        """Remove an include if present.

        Returns:
            True if the include was listed.
        """
        if include not in self._items:
            return False
        self._items.remove(include)
        return True

    def replace(self, old: str, new: str) -> None:
        """Rename an include in place, dropping it if the new name is already listed."""
        index = self._items.index(old)
        if new != old and new in self._items:
            del self._items[index]
        else:
            self._items[index] = new

    def to_list(self) -> list[str]:
        return list(self._items)

    def __contains__(self, include: object) -> bool:
        return include in self._items

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IncludeList):
            return self._items == other._items
        if isinstance(other, list):
            return self._items == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"IncludeList({self._items!r})"

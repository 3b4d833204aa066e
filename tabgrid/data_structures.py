"""Contains commonly used data structures."""

from __future__ import annotations

from itertools import count
from operator import itemgetter
from typing import TYPE_CHECKING, Generic, NamedTuple, TypeVar, Union

if TYPE_CHECKING:
    from collections.abc import Iterator

T = TypeVar("T")


class DiStr(NamedTuple):
    """A tuple of four strings with directions."""

    top: str = ""
    right: str = ""
    bottom: str = ""
    left: str = ""

    @classmethod
    def from_value(cls, value: str) -> DiStr:
        """Construct an instance from a single value."""
        return cls(top=value, right=value, bottom=value, left=value)


class Position(NamedTuple):
    """The row and column of a cell in the grid."""

    row: int
    col: int


class GlobalEntity(NamedTuple):
    """Every cell of the grid."""


class RowEntity(NamedTuple):
    """Every cell in a row."""

    row: int


class ColumnEntity(NamedTuple):
    """Every cell in a column."""

    col: int


class CellEntity(NamedTuple):
    """A single cell."""

    row: int
    col: int


Entity = Union[GlobalEntity, RowEntity, ColumnEntity, CellEntity]


def iter_positions(
    entity: Entity, count_rows: int, count_cols: int
) -> Iterator[Position]:
    """Yield the positions inside the bounds of the grid selected by an entity."""
    if isinstance(entity, GlobalEntity):
        for row in range(count_rows):
            for col in range(count_cols):
                yield Position(row, col)
    elif isinstance(entity, RowEntity):
        if 0 <= entity.row < count_rows:
            for col in range(count_cols):
                yield Position(entity.row, col)
    elif isinstance(entity, ColumnEntity):
        if 0 <= entity.col < count_cols:
            for row in range(count_rows):
                yield Position(row, entity.col)
    elif 0 <= entity.row < count_rows and 0 <= entity.col < count_cols:
        yield Position(entity.row, entity.col)


class EntityMap(Generic[T]):
    """Store values against entities, looking them up per cell.

    The most recently set entity covering a cell provides its value. Setting the
    global value discards every more specific value.
    """

    def __init__(self, default: T) -> None:
        """Create a new map with a global default value."""
        self.default = default
        self._entries: dict[Entity, tuple[int, T]] = {}
        self._counter = count()
        self._frozen = False

    def set(self, entity: Entity, value: T) -> None:
        """Set the value for an entity."""
        if self._frozen:
            raise TypeError("Cannot modify a frozen entity map")
        if isinstance(entity, GlobalEntity):
            self.default = value
            self._entries.clear()
        else:
            self._entries[entity] = (next(self._counter), value)

    def get(self, row: int, col: int) -> T:
        """Look up the value which applies to a cell."""
        if not self._entries:
            return self.default
        candidates = [
            entry
            for entry in (
                self._entries.get(CellEntity(row, col)),
                self._entries.get(ColumnEntity(col)),
                self._entries.get(RowEntity(row)),
            )
            if entry is not None
        ]
        if not candidates:
            return self.default
        return max(candidates, key=itemgetter(0))[1]

    def freeze(self) -> EntityMap[T]:
        """Return a read-only copy of this map."""
        frozen: EntityMap[T] = EntityMap(self.default)
        frozen._entries = dict(self._entries)
        frozen._frozen = True
        return frozen

    def __repr__(self) -> str:
        """Return a representation of the map."""
        return f"EntityMap(default={self.default!r}, entries={self._entries!r})"

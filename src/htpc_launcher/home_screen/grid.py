"""Grid index arithmetic.

Entries fill a fixed rows x cols grid row by row. Trailing cells past the
last entry exist as geometry only and can never be selected.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class GridModel:
    """Fixed-size grid mapped onto ``entry_count`` occupied cells.

    Moves return the new index, or None when the move is not allowed.
    Moves never wrap. Right and down are bounded by ``entry_count``, left
    and up only by the grid edge.
    """

    rows: int
    cols: int
    entry_count: int

    @property
    def capacity(self) -> int:
        """Total number of cells, occupied or not."""
        return self.rows * self.cols

    def contains(self, index: int) -> bool:
        """Check if an index holds an entry."""
        return 0 <= index < self.entry_count

    def position(self, index: int) -> Tuple[int, int]:
        """(row, col) of a cell index."""
        return divmod(index, self.cols)

    def move_right(self, selected: int) -> Optional[int]:
        nxt = selected + 1
        if nxt < self.entry_count and nxt % self.cols != 0:
            return nxt
        return None

    def move_left(self, selected: int) -> Optional[int]:
        if selected % self.cols != 0:
            return selected - 1
        return None

    def move_down(self, selected: int) -> Optional[int]:
        nxt = selected + self.cols
        if nxt < self.entry_count:
            return nxt
        return None

    def move_up(self, selected: int) -> Optional[int]:
        if selected >= self.cols:
            return selected - self.cols
        return None

"""Fill-down of blank cells within one sheet."""

from __future__ import annotations

from typing import List, Sequence

from collate.core.events import CollateEvents

Row = List[str]


def fill_down(rows: Sequence[Sequence[str]], events: CollateEvents | None = None) -> List[Row]:
    """Copy the value above into every empty cell below the first row.

    Works column by column and only forwards. A column the previous row
    does not have (ragged rows) counts as no prior value, so the cell stays
    empty. Returns new rows; ``rows`` is not modified.
    """
    events = events or CollateEvents()
    filled: List[Row] = []
    for ri, source in enumerate(rows):
        row = list(source)
        if ri > 0:
            previous = filled[ri - 1]
            for ci, cell in enumerate(row):
                if cell != "" or ci >= len(previous):
                    continue
                row[ci] = previous[ci]
                events.cell_filled(ri, ci, row[ci])
        filled.append(row)
    return filled

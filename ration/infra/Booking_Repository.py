"""Booking rows persisted in the rations sheet (columns B..K, data from row 2).

Placement is compute-then-write: callers read the existing keys, decide update
vs append, then write. Two submissions for the same new key that both read
before either writes will both append, leaving duplicate rows. Readers resolve
duplicates with last-row-wins; the sheet offers no conditional write to close
the gap.
"""
from typing import List, Tuple

from ration.domain.Booking import BookingRow
from ration.utilities.constants import FIRST_DATA_ROW, WRITE_COLS_END, WRITE_COLS_START


class BookingRepository:
    def __init__(self, gateway, sheet_name: str):
        self.gateway = gateway
        self.sheet_name = sheet_name

    def _row_range(self, row_number: int) -> str:
        return f"{self.sheet_name}!{WRITE_COLS_START}{row_number}:{WRITE_COLS_END}{row_number}"

    def read_rows(self) -> List[Tuple[int, BookingRow]]:
        """All data rows in sheet order, paired with their 1-based sheet row number."""
        values = self.gateway.get_values(
            f"{self.sheet_name}!{WRITE_COLS_START}{FIRST_DATA_ROW}:{WRITE_COLS_END}"
        )
        return [(idx + FIRST_DATA_ROW, BookingRow.from_cells(cells)) for idx, cells in enumerate(values)]

    def first_empty_row(self) -> int:
        """First row after the populated part of the key column (B)."""
        col = self.gateway.get_values(
            f"{self.sheet_name}!{WRITE_COLS_START}{FIRST_DATA_ROW}:{WRITE_COLS_START}"
        )
        return len(col) + FIRST_DATA_ROW

    def update_rows(self, rows: List[Tuple[int, BookingRow]]) -> int:
        data = [{"range": self._row_range(n), "values": [row.to_cells()]} for n, row in rows]
        return self.gateway.batch_update(data)

    def append_rows(self, rows: List[BookingRow]) -> int:
        if not rows:
            return 0
        start = self.first_empty_row()
        data = [
            {"range": self._row_range(start + i), "values": [row.to_cells()]}
            for i, row in enumerate(rows)
        ]
        return self.gateway.batch_update(data)

"""Submitter names kept in column A of the namelist sheet."""
from typing import List

from ration.utilities.constants import NAMELIST_RANGE


class NamelistRepository:
    def __init__(self, gateway, sheet_name: str):
        self.gateway = gateway
        self.sheet_name = sheet_name

    @property
    def range_name(self) -> str:
        return f"{self.sheet_name}!{NAMELIST_RANGE}"

    @property
    def cache_key(self) -> str:
        return f"{self.gateway.spreadsheet_id}:{self.range_name}"

    def fetch_rows(self) -> List[list]:
        return self.gateway.get_values(self.range_name)

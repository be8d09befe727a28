"""FastAPI dependencies wiring the endpoints to the spreadsheet.

Tests replace these through ``app.dependency_overrides``.
"""
from functools import lru_cache

from ration.infra.Booking_Repository import BookingRepository
from ration.infra.Namelist_Repository import NamelistRepository
from ration.infra.Sheets_Gateway import SheetsGateway
from ration.logic.namelist.cache import NamelistService, TTLCache
from ration.utilities import config

# process-wide; lives as long as the server
NAMELIST_CACHE = TTLCache(ttl_seconds=config.NAMELIST_TTL_SECONDS)


@lru_cache
def get_gateway() -> SheetsGateway:
    return SheetsGateway(config.RATION_SHEET_ID)


def get_booking_repository() -> BookingRepository:
    return BookingRepository(get_gateway(), config.RATIONS_SHEET_NAME)


def get_namelist_service() -> NamelistService:
    return NamelistService(NamelistRepository(get_gateway(), config.NAMELIST_SHEET_NAME), NAMELIST_CACHE)

"""Async HTTP client for the ration endpoints, used by the planner."""
import logging
from typing import Any, Dict, List, Optional

import httpx

from ration.domain.Plan import WeekPlan
from ration.logic.namelist.cache import extract_names
from ration.utilities import config

logger = logging.getLogger(__name__)


class RationApiError(Exception):
    """Non-2xx response. ``message`` is the server's ``error`` field when it sent one."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _raise_for_error(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError:
        data = None
    if response.status_code >= 400:
        message = data.get("error") if isinstance(data, dict) else None
        raise RationApiError(message or f"HTTP {response.status_code}", response.status_code)
    if not isinstance(data, dict):
        raise RationApiError("Malformed response", response.status_code)
    return data


class RationApiClient:
    def __init__(self, base_url: str = config.RATION_API_BASE_URL,
                 transport: Optional[httpx.AsyncBaseTransport] = None, timeout: float = 10.0):
        self.base_url = base_url
        self.transport = transport
        self.timeout = timeout

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, transport=self.transport, timeout=self.timeout)

    async def fetch_ration(self, name: str, week_start: str) -> Dict[str, Any]:
        """GET /api/getRation. The ``plan`` entry is returned as a WeekPlan."""
        async with self._client() as client:
            response = await client.get("/api/getRation", params={"name": name, "weekStart": week_start})
        data = _raise_for_error(response)
        data["plan"] = WeekPlan.from_dict(data.get("plan"))
        return data

    async def submit_ration(self, name: str, ration_type: str, week_start: str, plan: WeekPlan) -> Dict[str, Any]:
        payload = {
            "name": name,
            "rationType": ration_type,
            "weekStart": week_start,
            "plan": plan.to_dict(),
        }
        async with self._client() as client:
            response = await client.post("/api/addRation", json=payload)
        data = _raise_for_error(response)
        logger.info("Submitted week %s for %s: %s", week_start, name, data.get("totalWritten"))
        return data

    async def fetch_names(self, reload: bool = False) -> List[str]:
        params = {"reload": "true"} if reload else None
        async with self._client() as client:
            response = await client.get("/api/getUsers", params=params)
        return extract_names(_raise_for_error(response).get("rows", []))

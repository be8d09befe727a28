"""Interactive weekly ration planner.

Holds the week being viewed, its draft plan, the identity used to submit it
and the fingerprint of the last plan the server confirmed. Front ends drive it
through the public methods and render from ``day_rows()``; notices go out on
the event bus.

Rules:
  - Weeks before the minimum bookable week (today + lead days, rounded to
    Monday) are read-only: every mutation is a no-op and submit is disabled.
  - Days strictly before today are locked even inside an editable week.
  - An editable week with unsaved changes cannot be navigated away from.
  - Every mutation is written to the local store as the week's draft.
  - Local store failures are treated as a cache miss / no-op.
"""
from __future__ import annotations

import logging
from datetime import date
from typing import Any, Callable, Dict, List, Optional

import httpx

from ration.api.client import RationApiError
from ration.domain.Booking import Meal, RationType
from ration.domain.Plan import WeekPlan
from ration.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from ration.events.event_helpers import (
    publish_navigation_blocked, publish_submit_failed, publish_submitted,
)
from ration.infra.Draft_Store import KeyValueStore, MemoryStore
from ration.logic.planner.drafts import (
    build_default_week, get_min_bookable_week_start_iso, is_dirty, is_past_date_locked, is_read_only_week,
    normalize_or_rebuild_draft, plan_fingerprint, selected_meal_count,
)
from ration.utilities import config
from ration.utilities.constants import RATION_OPTIONS, STORE_SCOPE
from ration.utilities.dates import format_day_label, next_week_start_iso

logger = logging.getLogger(__name__)

STATUS_LOADING = "loading"
STATUS_READY = "ready"

LOCK_EDITABLE = "editable"
LOCK_PAST = "locked-past"
LOCK_READONLY_WEEK = "locked-readonly-week"


class WeeklyPlanner:
    def __init__(self, client, store: Optional[KeyValueStore] = None, bus: Optional[EventBus] = None,
                 today: Callable[[], date] = date.today, scope: str = STORE_SCOPE,
                 lead_days: int = config.BOOKING_LEAD_DAYS):
        self.client = client
        self.store = store if store is not None else MemoryStore()
        self.bus = bus or GLOBAL_EVENT_BUS
        self.scope = scope
        self._today = today
        self.lead_days = lead_days
        self.namelist: List[str] = []

        self._week_start = self.min_week_start
        self._plan = build_default_week(self._week_start)
        self._submitted_fp: Optional[str] = None
        self._load_seq = 0
        self.status = STATUS_LOADING

        self._name = self._store_get(self._key("name")) or ""
        stored_type = self._store_get(self._key("defaultRationType")) or ""
        self._ration_type = stored_type if RationType.is_valid(stored_type) else ""

    # ---------- local store ----------
    def _key(self, suffix: str) -> str:
        return f"{self.scope}:{suffix}"

    def _draft_key(self, week_start: str) -> str:
        return self._key(f"weekDraft:{week_start}")

    def _submitted_key(self, week_start: str) -> str:
        return self._key(f"submitted:{week_start}")

    def _store_get(self, key: str) -> Optional[str]:
        try:
            return self.store.get(key)
        except Exception as e:
            logger.debug("Local store read failed for %s: %s", key, e)
            return None

    def _store_set(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except Exception as e:
            logger.debug("Local store write failed for %s: %s", key, e)

    def _store_remove(self, key: str) -> None:
        try:
            self.store.remove(key)
        except Exception as e:
            logger.debug("Local store remove failed for %s: %s", key, e)

    def _commit(self, plan: WeekPlan) -> None:
        self._plan = plan
        self._store_set(self._draft_key(self._week_start), plan_fingerprint(plan))

    # ---------- read-only views ----------
    @property
    def name(self) -> str:
        return self._name

    @property
    def default_ration_type(self) -> str:
        return self._ration_type

    @property
    def week_start(self) -> str:
        return self._week_start

    @property
    def plan(self) -> WeekPlan:
        return self._plan.copy()

    @property
    def min_week_start(self) -> str:
        return get_min_bookable_week_start_iso(self._today(), self.lead_days)

    @property
    def read_only(self) -> bool:
        return is_read_only_week(self._week_start, self._today(), self.lead_days)

    @property
    def dirty(self) -> bool:
        return is_dirty(self._plan, self._submitted_fp)

    @property
    def selected_count(self) -> int:
        return selected_meal_count(self._plan, self._today())

    @property
    def can_submit(self) -> bool:
        return (
            self.status == STATUS_READY
            and not self.read_only
            and bool(self._name.strip())
            and bool(self._ration_type)
            and self.dirty
        )

    def day_lock_state(self, date_iso: str) -> str:
        if self.read_only:
            return LOCK_READONLY_WEEK
        if is_past_date_locked(date_iso, self._today()):
            return LOCK_PAST
        return LOCK_EDITABLE

    def day_rows(self) -> List[Dict[str, Any]]:
        """One entry per weekday, in date order, ready to render."""
        rows = []
        for date_iso in sorted(self._plan.days):
            day = self._plan.days[date_iso]
            rows.append({
                "date": date_iso,
                "label": format_day_label(date_iso),
                "lock": self.day_lock_state(date_iso),
                "enabled": day.enabled,
                "meals": dict(day.meals),
            })
        return rows

    def ration_options(self) -> List[Dict[str, Any]]:
        return [dict(option, selected=option["value"] == self._ration_type) for option in RATION_OPTIONS]

    def _can_edit(self, date_iso: str) -> bool:
        if self.status != STATUS_READY or date_iso not in self._plan.days:
            return False
        return self.day_lock_state(date_iso) == LOCK_EDITABLE

    # ---------- identity ----------
    async def set_name(self, name: Optional[str]) -> None:
        """Persist the submitter name; a newly known name reloads the week from the server."""
        name = name or ""
        became_known = bool(name.strip()) and name.strip() != self._name.strip()
        self._name = name
        if name.strip():
            self._store_set(self._key("name"), name)
        else:
            self._store_remove(self._key("name"))
        if became_known:
            await self.load_week()

    def set_default_ration_type(self, value: Optional[str]) -> None:
        value = value or ""
        if value and not RationType.is_valid(value):
            raise ValueError(f"Unknown ration type: {value}")
        self._ration_type = value
        if value:
            self._store_set(self._key("defaultRationType"), value)
        else:
            self._store_remove(self._key("defaultRationType"))

    async def load_namelist(self, reload: bool = False) -> List[str]:
        try:
            self.namelist = await self.client.fetch_names(reload=reload)
        except (RationApiError, httpx.HTTPError) as e:
            logger.warning("Could not load namelist: %s", e)
            self.namelist = []
        return list(self.namelist)

    # ---------- loading & navigation ----------
    async def load_week(self) -> WeekPlan:
        """Load the current week: server copy when possible, otherwise the local draft.

        A server copy also becomes the submitted baseline, so the week starts
        clean. When a newer load has started meanwhile, this response is dropped.
        """
        self._load_seq += 1
        seq = self._load_seq
        week_start = self._week_start
        self.status = STATUS_LOADING

        remote = None
        name = self._name.strip()
        if name:
            try:
                remote = await self.client.fetch_ration(name, week_start)
            except (RationApiError, httpx.HTTPError) as e:
                logger.warning("Falling back to local draft for %s: %s", week_start, e)

        if seq != self._load_seq:
            logger.debug("Discarding stale load for week %s", week_start)
            return self.plan

        if remote is not None:
            plan = normalize_or_rebuild_draft(plan_fingerprint(remote["plan"]), week_start)
            self._submitted_fp = plan_fingerprint(plan)
            self._store_set(self._submitted_key(week_start), self._submitted_fp)
            ration_type = remote.get("rationType")
            if not self._ration_type and RationType.is_valid(ration_type):
                self.set_default_ration_type(ration_type)
        else:
            plan = normalize_or_rebuild_draft(self._store_get(self._draft_key(week_start)), week_start)
            self._submitted_fp = self._store_get(self._submitted_key(week_start))

        self._commit(plan)
        self.status = STATUS_READY
        return self.plan

    async def _go_to(self, week_start: str) -> bool:
        if not self.read_only and self.dirty:
            publish_navigation_blocked(self._week_start, self.bus)
            return False
        self._week_start = week_start
        await self.load_week()
        return True

    async def prev_week(self) -> bool:
        return await self._go_to(next_week_start_iso(self._week_start, -1))

    async def next_week(self) -> bool:
        return await self._go_to(next_week_start_iso(self._week_start, 1))

    async def jump_to_earliest(self) -> bool:
        return await self._go_to(self.min_week_start)

    # ---------- plan mutations ----------
    def set_day_enabled(self, date_iso: str, enabled: bool) -> bool:
        if not self._can_edit(date_iso):
            return False
        plan = self._plan.copy()
        plan.days[date_iso].set_enabled(enabled)
        self._commit(plan)
        return True

    def toggle_day(self, date_iso: str) -> bool:
        day = self._plan.days.get(date_iso)
        if day is None:
            return False
        return self.set_day_enabled(date_iso, not day.enabled)

    def toggle_meal(self, date_iso: str, meal: str) -> bool:
        meal = Meal(meal).value
        if not self._can_edit(date_iso) or not self._plan.days[date_iso].enabled:
            return False
        plan = self._plan.copy()
        day = plan.days[date_iso]
        day.meals[meal] = not day.meals[meal]
        self._commit(plan)
        return True

    def clear_week(self) -> bool:
        if self.read_only or self.status != STATUS_READY:
            return False
        self._plan = build_default_week(self._week_start)
        self._store_remove(self._draft_key(self._week_start))
        return True

    # ---------- submit ----------
    async def submit(self) -> Optional[Dict[str, Any]]:
        """Send the current week. Returns the server response, or None when not sent or rejected."""
        if not self.can_submit:
            return None
        week_start = self._week_start
        snapshot = self._plan.copy()
        try:
            result = await self.client.submit_ration(self._name.strip(), self._ration_type, week_start, snapshot)
        except RationApiError as e:
            logger.warning("Submit rejected for %s: %s", week_start, e.message)
            publish_submit_failed(week_start, e.message, self.bus)
            return None
        except httpx.HTTPError as e:
            logger.warning("Submit failed for %s: %s", week_start, e)
            publish_submit_failed(week_start, "network error", self.bus)
            return None

        fingerprint = plan_fingerprint(snapshot)
        self._store_set(self._submitted_key(week_start), fingerprint)
        if week_start == self._week_start:
            self._submitted_fp = fingerprint
        publish_submitted(week_start, result.get("updated", 0), result.get("appended", 0), self.bus)
        return result


__all__ = [
    "WeeklyPlanner", "STATUS_LOADING", "STATUS_READY",
    "LOCK_EDITABLE", "LOCK_PAST", "LOCK_READONLY_WEEK",
]

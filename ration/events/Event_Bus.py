"""Simple Event Bus / Observer implementation for planner notices.

Event names used so far:
  planner.submitted -> payload {"weekStart": str, "updated": int, "appended": int}
  planner.submit_failed -> payload {"weekStart": str, "reason": str}
  planner.navigation_blocked -> payload {"weekStart": str, "reason": str}

Subscribers are callables taking (event_name, payload). Subscribing to ``"*"``
receives every event. A front end turns these into toasts.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
PLANNER_SUBMITTED = "planner.submitted"
PLANNER_SUBMIT_FAILED = "planner.submit_failed"
PLANNER_NAVIGATION_BLOCKED = "planner.navigation_blocked"

ALL_EVENTS = "*"

Listener = Callable[[str, Any], None]


class EventBus:
	def __init__(self):
		self._listeners: Dict[str, List[Listener]] = defaultdict(list)

	def subscribe(self, event_name: str, listener: Listener) -> Callable[[], None]:
		"""Register ``listener``; the returned callable removes it again."""
		listeners = self._listeners[event_name]
		if listener not in listeners:
			listeners.append(listener)
		return lambda: self.unsubscribe(event_name, listener)

	def unsubscribe(self, event_name: str, listener: Listener) -> None:
		listeners = self._listeners.get(event_name, [])
		if listener in listeners:
			listeners.remove(listener)

	def publish(self, event_name: str, payload: Any) -> int:
		"""Deliver to the event's listeners, then to wildcard ones. Returns how many succeeded."""
		targets = list(self._listeners.get(event_name, []))
		if event_name != ALL_EVENTS:
			targets += self._listeners.get(ALL_EVENTS, [])
		delivered = 0
		for listener in targets:
			try:
				listener(event_name, payload)
			except Exception:
				logger.exception("Listener %r failed on %s", listener, event_name)
				continue
			delivered += 1
		return delivered


# Process-wide bus used when a planner is not given its own
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
	'EventBus', 'GLOBAL_EVENT_BUS', 'ALL_EVENTS',
	'PLANNER_SUBMITTED', 'PLANNER_SUBMIT_FAILED', 'PLANNER_NAVIGATION_BLOCKED'
]

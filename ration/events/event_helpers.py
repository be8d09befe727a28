"""Event helper utilities.

Helpers for publishing planner notices on an event bus (the global one unless
another is passed in).

Quick import:
    from ration.events.event_helpers import (
        publish_submitted, publish_submit_failed, publish_navigation_blocked,
    )
"""
from __future__ import annotations
from typing import Optional
from .Event_Bus import (
    EventBus, GLOBAL_EVENT_BUS,
    PLANNER_SUBMITTED, PLANNER_SUBMIT_FAILED, PLANNER_NAVIGATION_BLOCKED,
)

__all__ = [
    'publish_submitted', 'publish_submit_failed', 'publish_navigation_blocked',
    'PLANNER_SUBMITTED', 'PLANNER_SUBMIT_FAILED', 'PLANNER_NAVIGATION_BLOCKED',
]


def publish_submitted(week_start: str, updated: int, appended: int, bus: Optional[EventBus] = None):
    """Publish a planner.submitted event."""
    (bus or GLOBAL_EVENT_BUS).publish(PLANNER_SUBMITTED, {
        'weekStart': week_start,
        'updated': updated,
        'appended': appended,
        'message': 'Ration submitted.',
    })


def publish_submit_failed(week_start: str, reason: str, bus: Optional[EventBus] = None):
    """Publish a planner.submit_failed event carrying the server's reason when known."""
    (bus or GLOBAL_EVENT_BUS).publish(PLANNER_SUBMIT_FAILED, {
        'weekStart': week_start,
        'reason': reason,
        'message': f'Submit failed: {reason}. Please try again.',
    })


def publish_navigation_blocked(week_start: str, bus: Optional[EventBus] = None):
    """Publish a planner.navigation_blocked event."""
    (bus or GLOBAL_EVENT_BUS).publish(PLANNER_NAVIGATION_BLOCKED, {
        'weekStart': week_start,
        'reason': 'unsaved changes',
        'message': 'You have unsaved changes for this week. Submit or clear them before switching weeks.',
    })

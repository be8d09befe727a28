"""Core business logic layer.

Subpackages:
- planner: weekly plan rules and the interactive planner state machine
- rations: upsert and read-back of booking rows
- namelist: cached lookup of submitter names
"""
__all__ = ["planner", "rations", "namelist"]

"""
Request schemas for the ration endpoints.

Every field is optional and loosely typed; the ration services report
missing or unusable fields as 400s. ``plan`` is passed through untouched:
null days and null meal flags read as unticked, and a plan that is not an
object is reported as ``Missing plan.days``.
"""
from pydantic import BaseModel, field_validator
from typing import Any, Optional


class AddRationInput(BaseModel):
    """Schema for POST /api/addRation."""
    name: Optional[Any] = None
    rationType: Optional[Any] = None
    weekStart: Optional[Any] = None
    plan: Optional[Any] = None

    @field_validator('name', 'rationType', 'weekStart')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v

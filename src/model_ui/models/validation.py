"""
Validation fragment models.

The validation source reports, per property, an ordered list whose first
entry is a TypeDescriptor and whose remaining entries are
ValidationFragments.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from model_ui.constants import BaseType


class TypeDescriptor(BaseModel):
    """Implicit base type of a property."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default=BaseType.STRING.value, description="string, number, bigint, boolean or date")


class ValidationFragment(BaseModel):
    """A single constraint on a property."""

    model_config = ConfigDict(frozen=True)

    key: str = Field(..., description="Constraint key, e.g. required, minlength, email")
    value: Any = Field(default=None, description="Configured value (bound, length, other field name)")
    pattern: str | None = Field(default=None, description="Regex pattern for pattern constraints")
    format: str | None = Field(default=None, description="Date format for date constraints")
    message: str | None = Field(default=None, description="Custom error message")

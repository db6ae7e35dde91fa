# backend/finance_tracker/schemas/apartment.py
"""
Pydantic schemas for the shared apartment split.

Each member has a configured percentage; when salaries are loaded for the
month the split follows salaries instead.
"""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from finance_tracker.schemas.validators import normalize_person_name


def _required_name(v: str) -> str:
    name = normalize_person_name(v)
    if not name:
        raise ValueError("person name cannot be empty")
    return name


class ApartmentMember(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    person_name: str
    percentage: Decimal = Field(
        default=Decimal("50"),
        ge=0,
        le=100,
        description="Share used when no salaries are loaded for the month"
    )

    @field_validator('person_name')
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return _required_name(v)


class ApartmentSalary(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    person_name: str
    salary: Decimal = Field(..., ge=0)

    @field_validator('person_name')
    @classmethod
    def normalize_name(cls, v: str) -> str:
        return _required_name(v)


class ApartmentExpense(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str | None = None
    description: str = ""
    amount: Decimal = Field(..., gt=0)
    category: str | None = None
    paid_by: str = Field(..., description="Member who paid the expense")

    @field_validator('paid_by')
    @classmethod
    def normalize_payer(cls, v: str) -> str:
        return _required_name(v)

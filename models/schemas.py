"""Request validation models.

Every command that accepts user input validates it through one of these
models before touching the database.
"""

import datetime as dt
from decimal import Decimal
from typing import Any, Dict, Literal, Optional, Type, TypeVar

from pydantic import BaseModel, Field, ValidationError, field_validator

from errors import InvalidInputError

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"

# bcrypt only hashes the first 72 bytes and rejects longer input
MAX_PASSWORD_BYTES = 72

T = TypeVar("T", bound=BaseModel)


class RegisterRequest(BaseModel):
    full_name: str = Field(min_length=2)
    email: str = Field(pattern=EMAIL_PATTERN)
    age: int = Field(ge=13, le=120)
    password: str = Field(min_length=6)

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
            raise ValueError(
                f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"
            )
        return value


class LoginRequest(BaseModel):
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1)


class SettingsUpdate(BaseModel):
    full_name: Optional[str] = Field(default=None, min_length=2)
    age: Optional[int] = Field(default=None, ge=13, le=120)
    currency: Optional[str] = None
    timezone: Optional[str] = None


class TransactionCreate(BaseModel):
    date: dt.date
    description: str = Field(min_length=1)
    amount: Decimal = Field(gt=0)
    type: Literal["debit", "credit"]
    category: Optional[str] = None


class TransactionUpdate(BaseModel):
    date: Optional[dt.date] = None
    description: Optional[str] = Field(default=None, min_length=1)
    amount: Optional[Decimal] = Field(default=None, gt=0)
    category: Optional[str] = None
    type: Optional[Literal["debit", "credit"]] = None


class GoalCreate(BaseModel):
    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    target_amount: Decimal = Field(gt=0)
    current_amount: Optional[Decimal] = Field(default=None, ge=0)
    deadline: dt.date
    category: str = Field(min_length=1)
    priority: Literal["high", "medium", "low"]
    monthly_contribution: Decimal = Field(gt=0)


class GoalUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    target_amount: Optional[Decimal] = Field(default=None, gt=0)
    current_amount: Optional[Decimal] = Field(default=None, ge=0)
    deadline: Optional[dt.date] = None
    category: Optional[str] = Field(default=None, min_length=1)
    priority: Optional[Literal["high", "medium", "low"]] = None
    status: Optional[Literal["active", "completed", "paused"]] = None
    monthly_contribution: Optional[Decimal] = Field(default=None, gt=0)


class ChatRequest(BaseModel):
    message: str = Field(min_length=1)


def parse_request(schema: Type[T], data: Dict[str, Any]) -> T:
    """Validate raw input against a schema.

    Args:
        schema: pydantic model class to validate with.
        data: Raw input values.

    Returns:
        Validated model instance.

    Raises:
        InvalidInputError: If validation fails. ``details`` holds pydantic's
            error list.
    """
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        raise InvalidInputError(
            "Validation failed", details=e.errors(include_url=False)
        ) from e

"""
Request body and query-string models.

Every model forbids unknown keys, so fields that must not change
(job id, companyHandle, company handle, username) are rejected with a 400.
Optional update fields default to None but refuse an explicit null where
the column is NOT NULL.
"""
from typing import Any, Mapping, Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from app.errors import BadRequestError

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+$"

ModelT = TypeVar("ModelT", bound=BaseModel)


class StrictModel(BaseModel):
    model_config = ConfigDict(extra="forbid")


def validation_messages(error: ValidationError) -> list[str]:
    messages = []
    for err in error.errors():
        location = ".".join(str(part) for part in err["loc"])
        messages.append(f"{location}: {err['msg']}" if location else err["msg"])
    return messages


def parse_model(model: Type[ModelT], data: Mapping[str, Any]) -> ModelT:
    """Validate `data` against `model`, raising BadRequestError on failure."""
    try:
        return model.model_validate(dict(data))
    except ValidationError as e:
        raise BadRequestError(validation_messages(e))


def parse_bool_param(value: Any) -> Any:
    """Query strings only carry "true" / "false"; "0", "yes" and friends are rejected."""
    if isinstance(value, str):
        lowered = value.lower()
        if lowered not in ("true", "false"):
            raise ValueError("must be 'true' or 'false'")
        return lowered == "true"
    return value


# Jobs

class JobNew(StrictModel):
    title: str = Field(min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)
    companyHandle: str = Field(min_length=1, max_length=25)


class JobUpdate(StrictModel):
    title: str = Field(None, min_length=1)
    salary: Optional[int] = Field(None, ge=0)
    equity: Optional[float] = Field(None, ge=0, le=1)


class JobFilter(StrictModel):
    title: Optional[str] = None
    minSalary: Optional[int] = Field(None, ge=0)
    hasEquity: Optional[bool] = None

    @field_validator("hasEquity", mode="before")
    @classmethod
    def check_has_equity(cls, value):
        return parse_bool_param(value)


# Companies

class CompanyNew(StrictModel):
    handle: str = Field(min_length=1, max_length=25, pattern=r"^[a-z0-9-]+$")
    name: str = Field(min_length=1)
    description: Optional[str] = None
    numEmployees: Optional[int] = Field(None, ge=0)
    logoUrl: Optional[str] = None


class CompanyUpdate(StrictModel):
    name: str = Field(None, min_length=1)
    description: str = None
    numEmployees: Optional[int] = Field(None, ge=0)
    logoUrl: Optional[str] = None


class CompanyFilter(StrictModel):
    nameLike: Optional[str] = None
    minEmployees: Optional[int] = Field(None, ge=0)
    maxEmployees: Optional[int] = Field(None, ge=0)


# Users

class UserAuth(StrictModel):
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserRegister(StrictModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=20)
    firstName: str = Field(min_length=1, max_length=30)
    lastName: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=6, max_length=60, pattern=EMAIL_PATTERN)


class UserNew(UserRegister):
    isAdmin: bool = False


class UserUpdate(StrictModel):
    password: str = Field(None, min_length=5, max_length=20)
    firstName: str = Field(None, min_length=1, max_length=30)
    lastName: str = Field(None, min_length=1, max_length=30)
    email: str = Field(None, min_length=6, max_length=60, pattern=EMAIL_PATTERN)
    isAdmin: bool = None

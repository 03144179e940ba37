"""
Request schemas.

Pydantic models validate the shape of JSON bodies before any service
is called. Field aliases match the camelCase wire format.
"""

import re
from datetime import date

from flask import request
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

# One lower case letter, one upper case letter, one digit, 6-13 length, no spaces
PASSWORD_PATTERN = re.compile(r'^(?=.*\d)(?=.*[a-z])(?=.*[A-Z])(?!.*\s).{6,13}$')

PASSWORD_MESSAGE = ('Password requires one lower case letter, one upper case letter, '
                    'one digit, 6-13 length, and no spaces')
CIRCLE_NAME_MESSAGE = ('The name must have a minimum of 3 characters '
                       'and a maximum of 56 characters')


class RequestSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


def _email(value):
    try:
        _, email = validate_email(value)
    except PydanticCustomError:
        raise ValueError('E-mail must be a valid e-mail.') from None
    return email.lower()


def _not_blank(value, message):
    value = value.strip()
    if not value:
        raise ValueError(message)
    return value


# ============================================================
# USERS
# ============================================================
class UserCreate(RequestSchema):
    email: str
    password: str
    first_name: str = Field(alias='firstName')
    last_name: str = Field(alias='lastName')

    @field_validator('email')
    @classmethod
    def check_email(cls, v: str) -> str:
        return _email(v)

    @field_validator('password')
    @classmethod
    def check_password(cls, v: str) -> str:
        if not PASSWORD_PATTERN.match(v):
            raise ValueError(PASSWORD_MESSAGE)
        return v

    @field_validator('first_name')
    @classmethod
    def check_first_name(cls, v: str) -> str:
        return _not_blank(v, 'First name cannot be empty.')

    @field_validator('last_name')
    @classmethod
    def check_last_name(cls, v: str) -> str:
        return _not_blank(v, 'Last name cannot be empty.')


class UserLogin(RequestSchema):
    email: str
    password: str


# ============================================================
# CIRCLES
# ============================================================
class CircleCreate(RequestSchema):
    name: str

    @field_validator('name')
    @classmethod
    def check_name(cls, v: str) -> str:
        v = v.strip()
        if not 3 <= len(v) <= 56:
            raise ValueError(CIRCLE_NAME_MESSAGE)
        return v


class MemberAdd(RequestSchema):
    email: str

    @field_validator('email')
    @classmethod
    def check_email(cls, v: str) -> str:
        return _email(v)


# ============================================================
# BILLS & BUDGETS
# ============================================================
class BillCreate(RequestSchema):
    bill_name: str = Field(alias='billName', max_length=120)
    bill_amount: float = Field(alias='billAmount', gt=0, allow_inf_nan=False)
    bill_category_id: int = Field(alias='billCategoryId')
    bill_date: date = Field(alias='billDate')

    @field_validator('bill_name')
    @classmethod
    def check_name(cls, v: str) -> str:
        return _not_blank(v, 'Bill name cannot be empty.')


class BudgetCreate(RequestSchema):
    budget_name: str = Field(alias='budgetName', max_length=120)
    budget_amount: float = Field(alias='budgetAmount', gt=0, allow_inf_nan=False)
    budget_start_date: date = Field(alias='budgetStartDate')
    budget_end_date: date = Field(alias='budgetEndDate')

    @field_validator('budget_name')
    @classmethod
    def check_name(cls, v: str) -> str:
        return _not_blank(v, 'Budget name cannot be empty.')

    @model_validator(mode='after')
    def check_dates(self):
        if self.budget_end_date < self.budget_start_date:
            raise ValueError('Budget end date cannot be before its start date')
        return self


# ============================================================
# HELPERS
# ============================================================
def load_body(schema):
    """Validate the JSON body of the current request against `schema`."""
    return schema.model_validate(request.get_json(silent=True) or {})


def validation_messages(exc: ValidationError) -> list[str]:
    """Human readable messages, one per problem."""
    messages = []
    for error in exc.errors():
        if error['type'] == 'value_error':
            messages.append(str(error['ctx']['error']))
        else:
            field = '.'.join(str(part) for part in error['loc'])
            messages.append(f"{field}: {error['msg']}" if field else error['msg'])
    return messages

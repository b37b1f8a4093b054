from __future__ import annotations

from typing import Annotated, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import AfterValidator, BaseModel, Field, model_validator


def _check_email(value: str) -> str:
    # accounts match emails exactly, so the normalized form is discarded
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValueError(str(exc)) from exc
    return value


Email = Annotated[str, AfterValidator(_check_email)]


class LoginForm(BaseModel):
    email: Email
    password: str = Field(..., min_length=1)


class RegisterForm(BaseModel):
    name: str = Field(..., min_length=2, max_length=200)
    email: Email
    password: str = Field(..., min_length=6)
    confirm_password: str
    phone: Optional[str] = None

    @model_validator(mode="after")
    def passwords_match(self) -> "RegisterForm":
        if self.password != self.confirm_password:
            raise ValueError("Passwords don't match")
        return self

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from app.domain.entities import Customer


class _CamelOut(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class CodeSentOut(BaseModel):
    status: Literal["sent"] = "sent"


class CustomerOut(_CamelOut):
    customer_id: str = Field(..., alias="customerId")
    email: str
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")

    @classmethod
    def from_customer(cls, customer: Customer) -> "CustomerOut":
        return cls(
            customer_id=customer.id,
            email=customer.email,
            first_name=customer.first_name,
            last_name=customer.last_name,
        )


class SignedInOut(CustomerOut):
    session_token: str = Field(..., alias="sessionToken")


class SsoTokenOut(_CamelOut):
    token: str
    login_url: str = Field(..., alias="loginUrl")


class OkOut(BaseModel):
    success: Literal[True] = True

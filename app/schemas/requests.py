from pydantic import BaseModel, ConfigDict, EmailStr, Field

from app.domain.entities import LineItem, PendingIdentity, Purpose


class _CamelIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class VerificationCodeIn(_CamelIn):
    email: EmailStr = Field(..., description="Where to send the code", max_length=255)
    purpose: Purpose
    first_name: str | None = Field(None, alias="firstName", max_length=255)
    last_name: str | None = Field(None, alias="lastName", max_length=255)

    def pending_identity(self) -> PendingIdentity:
        return PendingIdentity(first_name=self.first_name, last_name=self.last_name)


class VerifyCodeIn(_CamelIn):
    email: EmailStr = Field(..., max_length=255)
    code: str = Field(..., min_length=1, max_length=32)
    purpose: Purpose
    first_name: str | None = Field(None, alias="firstName", max_length=255)
    last_name: str | None = Field(None, alias="lastName", max_length=255)


class SsoTokenIn(_CamelIn):
    email: EmailStr = Field(..., max_length=255)
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    return_to: str | None = Field(None, alias="returnTo")


class LineItemIn(_CamelIn):
    variant_id: str = Field(..., alias="variantId", min_length=1)
    quantity: int = Field(1, ge=1)

    def to_line_item(self) -> LineItem:
        return LineItem(variant_id=self.variant_id, quantity=self.quantity)


class BulkOrderIn(_CamelIn):
    items: list[LineItemIn] = Field(..., min_length=1)

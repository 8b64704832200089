from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from app.domain.errors import ValidationError


class Purpose(str, Enum):
    LOGIN = "login"
    REGISTRATION = "registration"


def normalize_email(email: str | None) -> str:
    normalized = (email or "").strip().lower()
    if not normalized:
        raise ValidationError("email is required")
    return normalized


@dataclass(frozen=True)
class PendingIdentity:
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True)
class VerificationRecord:
    code: str
    issued_at: datetime
    purpose: Purpose
    pending_identity: PendingIdentity | None = None

    def is_expired(self, now: datetime, ttl_seconds: int) -> bool:
        return (now - self.issued_at).total_seconds() > ttl_seconds


@dataclass(frozen=True)
class Identity:
    email: str
    first_name: str | None = None
    last_name: str | None = None


@dataclass(frozen=True)
class Customer:
    id: str
    email: str
    first_name: str | None = None
    last_name: str | None = None

    @classmethod
    def from_upstream(cls, data: dict) -> "Customer":
        return cls(
            id=str(data["id"]),
            email=str(data.get("email") or ""),
            first_name=data.get("first_name"),
            last_name=data.get("last_name"),
        )


@dataclass(frozen=True)
class LineItem:
    variant_id: str
    quantity: int = 1

    def __post_init__(self):
        if self.quantity < 1:
            raise ValidationError("quantity must be at least 1")


@dataclass(frozen=True)
class SsoClaims:
    email: str
    created_at: datetime
    first_name: str | None = None
    last_name: str | None = None
    return_to: str | None = None

    def to_payload(self) -> dict[str, str]:
        """Claims in the order the platform expects them."""
        created = self.created_at.isoformat(timespec="milliseconds")
        return {
            "email": self.email,
            "created_at": created.replace("+00:00", "Z"),
            "first_name": self.first_name or "",
            "last_name": self.last_name or "",
            "return_to": self.return_to or "",
        }

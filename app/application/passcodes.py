import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Callable
from datetime import datetime

import app.domain.services as domain_services
from app.domain.entities import (
    Identity,
    PendingIdentity,
    Purpose,
    VerificationRecord,
    normalize_email,
)
from app.domain.errors import (
    CodeExpired,
    CodeMismatch,
    CodeNotFound,
    PurposeMismatch,
)
from app.domain.ports.email_port import EmailPort
from app.domain.ports.verification_store import VerificationStorePort

logger = logging.getLogger(__name__)

DEFAULT_CODE_TTL_SECONDS = 600

_SUBJECTS = {
    Purpose.LOGIN: "Your login code",
    Purpose.REGISTRATION: "Confirm your email address",
}


class PasscodeService:
    """
    Issues and single-use-verifies numeric passcodes keyed by email.

    Per email: NONE -> PENDING -> (CONSUMED | EXPIRED) -> NONE.
    A wrong code leaves the record PENDING until it expires.
    """

    def __init__(
        self,
        store: VerificationStorePort,
        email_sender: EmailPort,
        *,
        ttl_seconds: int = DEFAULT_CODE_TTL_SECONDS,
        clock: Callable[[], datetime] = domain_services.utc_now,
    ) -> None:
        self._store = store
        self._email = email_sender
        self._ttl = ttl_seconds
        self._clock = clock

    async def issue_code(
        self,
        email: str,
        purpose: Purpose,
        pending_identity: PendingIdentity | None = None,
    ) -> None:
        key = normalize_email(email)
        code = domain_services.generate_6digit_code()
        record = VerificationRecord(
            code=code,
            issued_at=self._clock(),
            purpose=purpose,
            pending_identity=(
                pending_identity if purpose is Purpose.REGISTRATION else None
            ),
        )

        async with self._store.lock(key):
            await self._store.put(key, record)
        logger.info(
            "verification code issued",
            extra={"email": key, "purpose": purpose.value},
        )

        minutes = self._ttl // 60
        await self._email.send(
            to=key,
            subject=_SUBJECTS[purpose],
            body=f"Your verification code is {code}. "
            f"It expires in {minutes} minutes.",
        )

    async def verify_code(
        self, email: str, submitted_code: str, purpose: Purpose
    ) -> Identity:
        async with self.redeem(email, submitted_code, purpose) as identity:
            return identity

    @asynccontextmanager
    async def redeem(
        self, email: str, submitted_code: str, purpose: Purpose
    ) -> AsyncIterator[Identity]:
        """
        Check the code and hold the key lock while the caller acts on it.

        The record is consumed only if the block exits cleanly; an exception
        raised inside the block leaves it in place for a retry.
        """
        key = normalize_email(email)

        async with self._store.lock(key):
            record = await self._store.get(key)
            if record is None:
                raise CodeNotFound()
            if record.purpose is not purpose:
                raise PurposeMismatch()
            if record.is_expired(self._clock(), self._ttl):
                await self._store.remove(key)
                logger.info("verification code expired", extra={"email": key})
                raise CodeExpired()
            if not domain_services.secure_compare(submitted_code, record.code):
                logger.info("verification code mismatch", extra={"email": key})
                raise CodeMismatch()

            pending = record.pending_identity or PendingIdentity()
            yield Identity(
                email=key,
                first_name=pending.first_name,
                last_name=pending.last_name,
            )
            await self._store.remove(key)

"""
Single-sign-on token construction for the storefront's hosted login page.

Token layout (both sides derive keys from the same shared secret):

    encryption key = SHA256(secret)
    signing key    = SHA256(secret || "signature")
    data           = AES-256-CBC(encryption key, iv, PKCS7(claims JSON))
    signature      = HMAC-SHA256(signing key, iv || data)
    token          = urlsafe_b64(JSON {"iv": b64, "data": b64, "signature": b64})
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import json
import os

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from app.domain.entities import SsoClaims
from app.domain.errors import ConfigurationError, InvalidSsoToken

IV_SIZE = 16
SIGNATURE_TAG = b"signature"


def derive_keys(shared_secret: str) -> tuple[bytes, bytes]:
    """Return (encryption_key, signing_key)."""
    secret = shared_secret.encode("utf-8")
    encryption_key = hashlib.sha256(secret).digest()
    signing_key = hashlib.sha256(secret + SIGNATURE_TAG).digest()
    return encryption_key, signing_key


def serialize_claims(claims: SsoClaims) -> bytes:
    return json.dumps(
        claims.to_payload(), separators=(",", ":"), ensure_ascii=False
    ).encode("utf-8")


def _sign(signing_key: bytes, iv: bytes, ciphertext: bytes) -> bytes:
    return hmac.new(signing_key, iv + ciphertext, hashlib.sha256).digest()


def _b64(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def build_token(claims: SsoClaims, shared_secret: str | None) -> str:
    if not shared_secret:
        raise ConfigurationError("SSO shared secret is not configured")

    encryption_key, signing_key = derive_keys(shared_secret)
    iv = os.urandom(IV_SIZE)

    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    padded = padder.update(serialize_claims(claims)) + padder.finalize()
    encryptor = Cipher(algorithms.AES(encryption_key), modes.CBC(iv)).encryptor()
    ciphertext = encryptor.update(padded) + encryptor.finalize()

    envelope = {
        "iv": _b64(iv),
        "data": _b64(ciphertext),
        "signature": _b64(_sign(signing_key, iv, ciphertext)),
    }
    raw = json.dumps(envelope, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii")


def open_token(token: str, shared_secret: str | None) -> dict[str, str]:
    """
    Verify and decrypt a token from build_token(); returns the claims dict.
    Raises InvalidSsoToken on malformed input or a signature mismatch.
    """
    if not shared_secret:
        raise ConfigurationError("SSO shared secret is not configured")

    try:
        envelope = json.loads(base64.urlsafe_b64decode(token.encode("ascii")))
        iv = base64.b64decode(envelope["iv"], validate=True)
        ciphertext = base64.b64decode(envelope["data"], validate=True)
        signature = base64.b64decode(envelope["signature"], validate=True)
    except (ValueError, KeyError, TypeError, binascii.Error) as e:
        raise InvalidSsoToken("malformed token") from e

    encryption_key, signing_key = derive_keys(shared_secret)
    if not hmac.compare_digest(_sign(signing_key, iv, ciphertext), signature):
        raise InvalidSsoToken("signature mismatch")

    try:
        decryptor = Cipher(
            algorithms.AES(encryption_key), modes.CBC(iv)
        ).decryptor()
        padded = decryptor.update(ciphertext) + decryptor.finalize()
        unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
        plaintext = unpadder.update(padded) + unpadder.finalize()
        return json.loads(plaintext.decode("utf-8"))
    except ValueError as e:
        raise InvalidSsoToken("undecryptable token") from e


def login_url(shop_domain: str, token: str) -> str:
    return f"https://{shop_domain}/account/login/multipass/{token}"

import re
from typing import Optional

import nacl.exceptions
import nacl.signing

from errors import (
    MalformedKeyError,
    MalformedSignatureError,
    MissingHeaderError,
    SignatureMismatchError,
)

SIGNATURE_HEADER = "X-Signature-Ed25519"
TIMESTAMP_HEADER = "X-Signature-Timestamp"

PUBLIC_KEY_LENGTH = 32
SIGNATURE_LENGTH = 64

_HEX = re.compile("[0-9a-fA-F]*")


# -----------------------------------------------------------------------------
def _decode_hex(value, length, error_cls, what):
    if not isinstance(value, str) or not _HEX.fullmatch(value):
        raise error_cls("{what} is not a hex string".format(what=what))
    try:
        raw = bytes.fromhex(value)
    except ValueError as err:
        raise error_cls("{what} is not valid hex: {err}".format(what=what, err=err))
    if len(raw) != length:
        raise error_cls(
            "{what} must be {length} bytes, got {n}".format(
                what=what, length=length, n=len(raw)
            )
        )
    return raw


def decode_public_key(value: str) -> bytes:
    return _decode_hex(value, PUBLIC_KEY_LENGTH, MalformedKeyError, "Public key")


def decode_signature(value: str) -> bytes:
    return _decode_hex(value, SIGNATURE_LENGTH, MalformedSignatureError, "Signature")


# -----------------------------------------------------------------------------
def verify_signature(
    public_key: bytes, timestamp: str, body: bytes, signature: bytes
) -> bool:
    """
    Return True iff signature is a valid Ed25519 signature of timestamp + body.

    Raises MalformedKeyError or MalformedSignatureError when the key or
    the signature does not have the length Ed25519 requires; a
    well-formed signature that does not verify yields False.

    """

    if len(public_key) != PUBLIC_KEY_LENGTH:
        raise MalformedKeyError("Public key must be 32 bytes")
    if len(signature) != SIGNATURE_LENGTH:
        raise MalformedSignatureError("Signature must be 64 bytes")

    try:
        verify_key = nacl.signing.VerifyKey(public_key)
    except (ValueError, TypeError, nacl.exceptions.CryptoError) as err:
        raise MalformedKeyError("Unusable public key: {err}".format(err=err))

    # Header values arrive latin-1 decoded; this restores the signed bytes.
    try:
        message = timestamp.encode("latin-1") + body
    except UnicodeEncodeError:
        return False
    try:
        verify_key.verify(message, signature)
    except nacl.exceptions.BadSignatureError:
        return False
    return True


# -----------------------------------------------------------------------------
def authenticate(
    public_key_hex: Optional[str],
    signature_hex: Optional[str],
    timestamp: Optional[str],
    body: bytes,
) -> None:
    """
    Authenticate one inbound request or raise an AuthenticationError.

    """

    if not public_key_hex:
        raise MalformedKeyError("No public key configured")
    if signature_hex is None:
        raise MissingHeaderError("Missing {h} header".format(h=SIGNATURE_HEADER))
    if timestamp is None:
        raise MissingHeaderError("Missing {h} header".format(h=TIMESTAMP_HEADER))

    public_key = decode_public_key(public_key_hex)
    signature = decode_signature(signature_hex)

    if not verify_signature(public_key, timestamp, body, signature):
        raise SignatureMismatchError("Signature verification failed")

"""HMAC-SHA256 webhook signature helpers."""

import hashlib
import hmac
import json
from collections.abc import Mapping
from typing import Any


def canonical_json(payload: Mapping[str, Any]) -> bytes:
    """Serialize a payload compactly, keeping key order and non-ASCII text."""
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")


def sign_payload(payload: Mapping[str, Any], secret: str) -> str:
    """Return the hex HMAC-SHA256 digest of the payload keyed by ``secret``."""
    return hmac.new(secret.encode("utf-8"), canonical_json(payload), hashlib.sha256).hexdigest()


def verify_signature(payload: Mapping[str, Any], secret: str | None, signature: str | None) -> bool:
    """Check a hex signature against the payload.

    Passes when no secret is configured or no signature was sent. Malformed
    hex on either side counts as a mismatch.
    """
    if not secret or not signature:
        return True

    try:
        expected = bytes.fromhex(sign_payload(payload, secret))
        provided = bytes.fromhex(signature)
    except ValueError:
        return False

    return hmac.compare_digest(expected, provided)

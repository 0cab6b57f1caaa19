"""
Request signing for the PayPlay API.

Every call is authenticated with an HMAC-SHA256 over a canonical string:

    <timestamp ms>\n<METHOD>\n<path>\n<body>

where body is the exact JSON text that goes on the wire, or an empty string
when the request has no body. The digest is sent as lowercase hex.
"""

import hashlib
import hmac
import time
from typing import Optional, Union


def canonical_string(timestamp: Union[int, str], method: str, path: str, body: str = "") -> str:
    return f"{timestamp}\n{method}\n{path}\n{body}"


def sign(secret: str, string_to_sign: str) -> str:
    """Lowercase hex HMAC-SHA256 of ``string_to_sign`` keyed with ``secret``."""
    return hmac.new(
        secret.encode("utf-8"),
        string_to_sign.encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


def verify_signature(
    secret: str,
    timestamp: str,
    method: str,
    path: str,
    body: str,
    signature: str,
    *,
    now_ms: Optional[int] = None,
    tolerance_ms: Optional[int] = None,
) -> bool:
    """
    Check a signature produced by :func:`sign`.

    When ``tolerance_ms`` is set, the timestamp must also be an integer within
    that many milliseconds of ``now_ms`` (current time if omitted), which
    bounds how long a captured request can be replayed.
    """
    if tolerance_ms is not None:
        try:
            ts = int(timestamp)
        except (TypeError, ValueError):
            return False
        if now_ms is None:
            now_ms = int(time.time() * 1000)
        if abs(now_ms - ts) > tolerance_ms:
            return False

    expected = sign(secret, canonical_string(timestamp, method, path, body))
    # Compare bytes: compare_digest rejects non-ASCII str.
    return hmac.compare_digest(expected.encode("ascii"), (signature or "").lower().encode("utf-8"))

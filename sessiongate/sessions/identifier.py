"""
Session identifier generation.

Identifiers are 32 bytes (256 bits) from a cryptographically secure random
source, encoded as URL-safe base64 without padding. The encoded form is
always 43 characters long.
"""

import base64
import secrets
from typing import Callable

from sessiongate.core.exceptions import IdentifierGenerationError


SESSION_ID_BYTES = 32
SESSION_ID_LENGTH = 43


def generate_session_id(
    random_source: Callable[[int], bytes] = secrets.token_bytes,
) -> str:
    """
    Generate a new session identifier.

    Args:
        random_source: Callable returning n random bytes. Defaults to
            secrets.token_bytes (the OS CSPRNG).

    Returns:
        URL-safe, padding-free token of SESSION_ID_LENGTH characters.

    Raises:
        IdentifierGenerationError: If the random source fails or returns
            fewer bytes than requested.
    """
    try:
        raw = random_source(SESSION_ID_BYTES)
    except (OSError, NotImplementedError) as e:
        raise IdentifierGenerationError(
            f"Random source unavailable: {e}"
        ) from e

    if not isinstance(raw, bytes) or len(raw) != SESSION_ID_BYTES:
        raise IdentifierGenerationError(
            f"Random source returned {len(raw) if raw else 0} bytes, "
            f"expected {SESSION_ID_BYTES}"
        )

    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")

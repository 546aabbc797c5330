"""Bearer-token check guarding the cron trigger and the refresh callbacks."""

from __future__ import annotations

import hmac

from catalog_cron.domain.exceptions import AuthorizationError


def expected_authorization(secret: str) -> str:
    """Return the literal ``Authorization`` header value for *secret*."""
    return f"Bearer {secret}"


def is_authorized(header: str | None, secret: str) -> bool:
    """Exact, case-sensitive match of *header* against ``Bearer <secret>``.

    An empty secret authorizes nothing, so a missing ``CRON_SECRET`` can never
    be satisfied by a bare ``Bearer `` header.
    """
    if header is None or not secret:
        return False
    return hmac.compare_digest(
        header.encode("utf-8"), expected_authorization(secret).encode("utf-8")
    )


def authorize(header: str | None, secret: str) -> None:
    """Raise :class:`AuthorizationError` unless *header* carries the secret."""
    if not is_authorized(header, secret):
        raise AuthorizationError("Unauthorized")

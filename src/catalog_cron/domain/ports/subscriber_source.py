"""Port: subscriber source — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol


class SubscriberSource(Protocol):
    """Abstract contract for the newsletter audience size."""

    async def count_subscribers(self) -> int:
        """Return the number of active newsletter subscribers."""
        ...

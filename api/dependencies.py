"""Request-scoped dependencies for the gateway routes."""
from __future__ import annotations

from typing import Optional

import httpx


def get_upstream_transport() -> Optional[httpx.AsyncBaseTransport]:
    """Transport for upstream provider calls; ``None`` uses the default network transport.

    Tests override this dependency with ``httpx.MockTransport``.
    """

    return None

# backend/finance_tracker/services/market_data/http.py
"""
JSON-over-HTTP helper shared by the httpx-based providers.

Maps transport and status failures onto the service exception hierarchy so
the retry policy in RetryingProvider can tell transient from permanent errors.
"""

import logging
from typing import Any

import httpx

from finance_tracker.services.exceptions import (
    ProviderUnavailableError,
    RateLimitError,
)

logger = logging.getLogger(__name__)


def get_json(
        client: httpx.Client,
        url: str,
        provider: str,
        params: dict[str, Any] | None = None,
) -> Any:
    """
    GET a URL and decode its JSON body.

    Raises:
        RateLimitError: HTTP 429
        ProviderUnavailableError: Transport errors, other non-2xx statuses,
            or a body that is not JSON
    """
    try:
        response = client.get(url, params=params)
    except httpx.HTTPError as e:
        raise ProviderUnavailableError(provider=provider, reason=str(e)) from e

    if response.status_code == 429:
        retry_after = response.headers.get("Retry-After")
        raise RateLimitError(
            provider=provider,
            retry_after=int(retry_after) if retry_after and retry_after.isdigit() else None,
        )
    if response.status_code >= 400:
        raise ProviderUnavailableError(
            provider=provider,
            reason=f"HTTP {response.status_code}",
        )

    try:
        return response.json()
    except ValueError as e:
        raise ProviderUnavailableError(provider=provider, reason="invalid JSON body") from e

"""Upstream signal feed client.

One GET against ``settings.signals_url``; no pagination and no retry.
"""

from __future__ import annotations

import httpx
from pydantic import TypeAdapter, ValidationError

from signaldash.core.config import settings
from signaldash.core.exceptions import ExternalServiceError
from signaldash.core.logging import get_logger
from signaldash.schemas.signals import Signal
from signaldash.services.signal_view import normalize_signals


logger = get_logger("services.signal_feed")

_signals_adapter = TypeAdapter(list[Signal])


async def fetch_signals(
    client: httpx.AsyncClient | None = None,
    url: str | None = None,
) -> list[Signal]:
    """Fetch and validate the full signal list.

    Args:
        client: Optional client to reuse (tests pass one with a mock transport)
        url: Override for ``settings.signals_url``

    Returns:
        Signals with dates normalized to ``YYYY-MM-DD``

    Raises:
        ExternalServiceError: On transport, HTTP status, JSON or schema failure
    """
    url = url or settings.signals_url
    try:
        if client is None:
            async with httpx.AsyncClient(timeout=float(settings.external_api_timeout)) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
        response.raise_for_status()
        signals = _signals_adapter.validate_python(response.json())
    except httpx.TimeoutException as e:
        logger.warning(f"Timeout fetching signals from {url}")
        raise ExternalServiceError(message="Signal feed timed out") from e
    except httpx.HTTPError as e:
        logger.warning(f"Error fetching signals from {url}: {e}")
        raise ExternalServiceError(message="Signal feed unavailable") from e
    except ValidationError as e:
        logger.warning(f"Signal feed returned malformed records: {e.error_count()} errors")
        raise ExternalServiceError(
            message="Signal feed returned malformed data",
            details={"errors": e.error_count()},
        ) from e
    except ValueError as e:
        logger.warning(f"Signal feed returned invalid JSON: {e}")
        raise ExternalServiceError(message="Signal feed returned invalid JSON") from e

    logger.debug(f"Fetched {len(signals)} signals")
    return normalize_signals(signals)

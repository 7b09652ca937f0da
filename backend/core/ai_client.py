import asyncio
import logging
from datetime import datetime, timezone
from typing import Optional

import httpx

from core.config import settings
from core.summary import generate_local_summary
from schemas.summary import SummaryRequest, SummaryResponse

logger = logging.getLogger(__name__)


class SummaryServiceError(Exception):
    pass


async def request_summary(
    payload: SummaryRequest,
    url: str,
    timeout: float,
    client: Optional[httpx.AsyncClient] = None,
) -> SummaryResponse:
    """
    Ask the external AI service for an item summary.

    Args:
        payload: Summary request, sent as camelCase JSON
        url: Service endpoint
        timeout: Upper bound in seconds for the whole call
        client: Optional shared client (a fresh one is opened otherwise)

    Returns:
        The validated service response

    Raises:
        SummaryServiceError: on timeout, transport error, non-2xx status or a
            body that does not match SummaryResponse
    """
    body = payload.model_dump(mode="json", by_alias=True, exclude_none=True)

    async def _post(c: httpx.AsyncClient) -> httpx.Response:
        return await c.post(url, json=body)

    try:
        if client is not None:
            resp = await asyncio.wait_for(_post(client), timeout)
        else:
            async with httpx.AsyncClient(timeout=timeout) as c:
                resp = await asyncio.wait_for(_post(c), timeout)
    except asyncio.TimeoutError as e:
        raise SummaryServiceError(f"AI service timed out after {timeout}s") from e
    except httpx.HTTPError as e:
        raise SummaryServiceError(f"AI service request failed: {e}") from e

    if not resp.is_success:
        raise SummaryServiceError(f"AI service returned {resp.status_code}")

    try:
        return SummaryResponse.model_validate(resp.json())
    except ValueError as e:
        raise SummaryServiceError(f"AI service returned a malformed body: {e}") from e


async def generate_summary(
    payload: SummaryRequest,
    now: Optional[datetime] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> SummaryResponse:
    """Summary from the AI service, or the local template when it is unavailable."""
    now = now or datetime.now(timezone.utc)
    if settings.ai_summary_url:
        try:
            return await request_summary(
                payload,
                url=settings.ai_summary_url,
                timeout=settings.ai_summary_timeout,
                client=client,
            )
        except SummaryServiceError as e:
            logger.info("AI service unavailable, using local fallback: %s", e)
    return generate_local_summary(payload, now)

import logging
import os
from typing import Any, Dict

import aiohttp  # type: ignore

logger = logging.getLogger(__name__)

TRACKING_URL = "https://track.bigbrain.me/prod/event"
TRACKING_TIMEOUT_SECONDS = 5


def tracking_enabled() -> bool:
    return os.getenv("MONDAY_TOOLKIT_DISABLE_TRACKING", "").lower() not in ("1", "true", "yes")


async def track_event(name: str, data: Dict[str, Any]) -> None:
    """
    Send a usage event. Never raises: tracking failures are logged at debug level.
    Args:
        name: Event name
        data: Event payload
    """
    if not tracking_enabled():
        return

    payload = {"name": name, "data": data}
    try:
        timeout = aiohttp.ClientTimeout(total=TRACKING_TIMEOUT_SECONDS)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.post(
                TRACKING_URL,
                json=payload,
                headers={"User-Agent": "dapulse", "Content-Type": "application/json"},
            ) as response:
                if response.status >= 400:
                    logger.debug(f"Tracking event {name} rejected with HTTP {response.status}")
    except Exception as e:
        logger.debug(f"Failed to track event {name}: {e}")

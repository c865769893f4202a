"""
Activity Log Client

Forwards grid mutations (space placed, relocated, removed, grid resized, ...)
to an external activity log so administrators can audit layout changes.

Activity Log API:
    - POST /api/activity - Record an event {action, details, timestamp}

When ACTIVITY_LOG_URL is not configured, events are only written to the
service log. Delivery failures never fail the request that produced the event.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from config import settings

logger = logging.getLogger(__name__)


class ActivityLogClient:
    """
    Client for the external activity log.

    Features:
        - Fire-and-report delivery (errors are returned, not raised)
        - Local logging when no endpoint is configured
        - Pluggable httpx transport
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.base_url = base_url if base_url is not None else settings.ACTIVITY_LOG_URL
        self.timeout = timeout if timeout is not None else settings.SERVICE_TIMEOUT
        self._transport = transport

    @property
    def enabled(self) -> bool:
        return bool(self.base_url)

    async def log_activity(self, action: str, details: Dict[str, Any]) -> Dict[str, Any]:
        """
        Record a grid activity event.

        Args:
            action: Event name, e.g. "space_placed"
            details: JSON-serializable event details

        Returns:
            Dict with success status, whether the event was delivered, and
            an error message on failure
        """
        event = {
            "action": action,
            "details": details,
            "timestamp": datetime.now(timezone.utc).isoformat()
        }

        if not self.enabled:
            logger.info(f"Activity {action}: {details}")
            return {"success": True, "delivered": False}

        url = f"{self.base_url.rstrip('/')}/api/activity"

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.post(url, json=event)
                response.raise_for_status()
                logger.debug(f"Activity {action} delivered")
                return {"success": True, "delivered": True}

        except httpx.TimeoutException:
            logger.warning(f"Activity log timeout for {action}")
            return {"success": False, "delivered": False, "error": "Activity log timed out"}

        except httpx.HTTPStatusError as e:
            logger.warning(f"Activity log HTTP error: {e.response.status_code}")
            return {
                "success": False,
                "delivered": False,
                "error": f"Activity log returned status {e.response.status_code}"
            }

        except httpx.ConnectError:
            logger.error(f"Failed to connect to activity log at {self.base_url}")
            return {
                "success": False,
                "delivered": False,
                "error": "Unable to connect to activity log"
            }

        except httpx.HTTPError as e:
            logger.error(f"Unexpected activity log error for {action}: {e}")
            return {"success": False, "delivered": False, "error": str(e)}


# Singleton instance for use across routers
activity_service = ActivityLogClient()

"""
Google Calendar client
Lists, creates, updates and deletes events through the Calendar v3 REST API.
Every call is a no-op when no calendar id or access token is configured.
"""
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from studio.core.config import (
    GOOGLE_CALENDAR_ACCESS_TOKEN,
    GOOGLE_CALENDAR_ID,
    GOOGLE_CALENDAR_TIMEOUT_SECONDS,
)
from studio.core.errors import IntegrationFailure

logger = logging.getLogger(__name__)

GOOGLE_CALENDAR_API = "https://www.googleapis.com/calendar/v3"


def _rfc3339(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()


class GoogleCalendarClient:
    def __init__(
        self,
        calendar_id: Optional[str] = GOOGLE_CALENDAR_ID,
        access_token: Optional[str] = GOOGLE_CALENDAR_ACCESS_TOKEN,
        timeout: float = GOOGLE_CALENDAR_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.calendar_id = calendar_id
        self.access_token = access_token
        self.timeout = timeout
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.calendar_id and self.access_token)

    def _events_path(self, calendar_id: Optional[str] = None) -> str:
        return f"/calendars/{quote(calendar_id or self.calendar_id, safe='')}/events"

    async def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        try:
            async with httpx.AsyncClient(
                base_url=GOOGLE_CALENDAR_API,
                timeout=self.timeout,
                transport=self.transport,
            ) as client:
                response = await client.request(
                    method,
                    path,
                    headers={"Authorization": f"Bearer {self.access_token}"},
                    **kwargs
                )
        except httpx.HTTPError as e:
            raise IntegrationFailure(f"Calendar request {method} {path} failed: {e}") from e

        if response.status_code >= 400:
            raise IntegrationFailure(
                f"Calendar request {method} {path} returned {response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )
        return response

    @staticmethod
    def _json(response: httpx.Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as e:
            raise IntegrationFailure(f"Calendar returned invalid JSON: {e}") from e
        if not isinstance(data, dict):
            raise IntegrationFailure(f"Calendar returned {type(data).__name__} where an object was expected")
        return data

    async def list_events(self, time_min: datetime, time_max: datetime) -> List[Dict[str, Any]]:
        if not self.configured:
            return []

        params = {
            "timeMin": _rfc3339(time_min),
            "timeMax": _rfc3339(time_max),
            "singleEvents": "true",
            "orderBy": "startTime",
            "maxResults": 250,
        }
        events: List[Dict[str, Any]] = []
        while True:
            data = self._json(await self._request("GET", self._events_path(), params=params))
            items = data.get("items") or []
            if not isinstance(items, list):
                raise IntegrationFailure("Calendar returned a malformed event list")
            events.extend(item for item in items if isinstance(item, dict))
            page_token = data.get("nextPageToken")
            if not page_token:
                return events
            params["pageToken"] = page_token

    async def create_event(self, details: Dict[str, Any]) -> Optional[str]:
        if not self.configured:
            return None
        data = self._json(await self._request("POST", self._events_path(), json=details))
        event_id = data.get("id")
        logger.info(f"Calendar event created: {event_id}")
        return event_id

    async def update_event(self, event_id: str, details: Dict[str, Any], calendar_id: Optional[str] = None) -> None:
        if not self.configured:
            return None
        await self._request("PATCH", f"{self._events_path(calendar_id)}/{quote(event_id, safe='')}", json=details)

    async def delete_event(self, event_id: str, calendar_id: Optional[str] = None) -> None:
        if not self.configured:
            return None
        try:
            await self._request("DELETE", f"{self._events_path(calendar_id)}/{quote(event_id, safe='')}")
        except IntegrationFailure as e:
            # 404 and 410 mean the event is already gone
            if e.status_code in (404, 410):
                logger.info(f"Calendar event {event_id} was already deleted")
                return None
            raise

"""Game Hub notification clients."""

import logging
from typing import Protocol, Union

import httpx

from ..config import settings
from ..errors import HubUnavailable
from ..models.events import EndGameNotification, StartGameNotification

logger = logging.getLogger(__name__)

Notification = Union[StartGameNotification, EndGameNotification]


class NotificationHub(Protocol):
    """Oversight service told when sessions start and end.

    Both calls are awaited inside the session transaction; raising aborts it.
    """

    async def start_game(
        self, hub_address: str, notification: StartGameNotification
    ) -> None: ...

    async def end_game(
        self, hub_address: str, notification: EndGameNotification
    ) -> None: ...


class HttpNotificationHub:
    """Posts notifications as JSON to ``{hub_address}/start_game`` and ``/end_game``.

    The address is read per call. While it is empty, notifications are only
    logged.
    """

    def __init__(self, timeout: float = settings.hub_timeout):
        self.timeout = timeout

    async def check_connection(self, hub_address: str) -> bool:
        """Check if the Hub is reachable."""
        try:
            async with httpx.AsyncClient(timeout=5.0) as client:
                response = await client.get(f"{hub_address}/health")
                return response.status_code == 200
        except Exception:
            return False

    async def start_game(
        self, hub_address: str, notification: StartGameNotification
    ) -> None:
        await self._post(hub_address, "start_game", notification)

    async def end_game(
        self, hub_address: str, notification: EndGameNotification
    ) -> None:
        await self._post(hub_address, "end_game", notification)

    async def _post(self, hub_address: str, path: str, notification: Notification) -> None:
        if not hub_address:
            logger.info(
                "No Game Hub address, %s for session %s only logged",
                path,
                notification.session_id,
            )
            return

        url = f"{hub_address.rstrip('/')}/{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(url, json=notification.model_dump(mode="json"))
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.exception("Hub %s failed for session %s", path, notification.session_id)
            raise HubUnavailable(f"{path}: {e}") from e


class LoggingNotificationHub:
    """Logs notifications and keeps them in memory instead of sending them."""

    def __init__(self):
        self.notifications: list[tuple[str, Notification]] = []

    async def start_game(
        self, hub_address: str, notification: StartGameNotification
    ) -> None:
        logger.info(
            "start_game -> %s: session %s, %s vs %s",
            hub_address,
            notification.session_id,
            notification.player1,
            notification.player2,
        )
        self.notifications.append((hub_address, notification))

    async def end_game(
        self, hub_address: str, notification: EndGameNotification
    ) -> None:
        logger.info(
            "end_game -> %s: session %s, player1_won=%s",
            hub_address,
            notification.session_id,
            notification.player1_won,
        )
        self.notifications.append((hub_address, notification))

    def of_type(self, kind: str) -> list[Notification]:
        """Recorded notifications of one kind ("start_game" or "end_game")."""
        return [n for _, n in self.notifications if n.type == kind]

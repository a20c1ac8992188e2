"""Donation queue and leaderboard storage on Upstash Redis (REST API)."""

import logging
from abc import ABC, abstractmethod
from typing import Any

import httpx
from pydantic import ValidationError

from donation_relay.config import Settings
from donation_relay.errors import StoreError, parse_upstash_error
from donation_relay.platforms import DonationEvent


logger = logging.getLogger(__name__)


class DonationStore(ABC):
    """Abstract base class for the pending queue and leaderboard backend."""

    @abstractmethod
    async def push_event(self, event: DonationEvent) -> None:
        """Append an event to the tail of the pending queue."""
        pass

    @abstractmethod
    async def pop_event(self) -> DonationEvent | None:
        """Remove and return the oldest pending event, None when empty."""
        pass

    @abstractmethod
    async def add_to_leaderboard(self, donator: str, amount: int | float) -> None:
        """Add ``amount`` to the donator's cumulative score."""
        pass

    @abstractmethod
    async def leaderboard(self) -> list[Any]:
        """Return all entries, highest score first, as a flat [member, score, ...] list."""
        pass

    async def aclose(self) -> None:
        pass


def _parse_score(score: Any) -> int | float:
    value = float(score)
    return int(value) if value.is_integer() else value


class UpstashStore(DonationStore):
    """Upstash Redis REST client.

    Every command is one POST of a JSON array such as ``["LPOP", "donations"]``;
    replies are ``{"result": ...}`` or ``{"error": "..."}``.
    """

    def __init__(
        self,
        url: str,
        token: str,
        queue_key: str = "donations",
        leaderboard_key: str = "saweria_leaderboard",
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.url = url.rstrip("/")
        self.token = token
        self.queue_key = queue_key
        self.leaderboard_key = leaderboard_key
        self._client = http_client or httpx.AsyncClient(timeout=timeout)

    @classmethod
    def from_settings(cls, settings: Settings, http_client: httpx.AsyncClient | None = None) -> "UpstashStore":
        return cls(
            url=settings.upstash_redis_rest_url,
            token=settings.upstash_redis_rest_token,
            queue_key=settings.donation_queue_key,
            leaderboard_key=settings.leaderboard_key,
            timeout=settings.store_timeout,
            http_client=http_client,
        )

    def _headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}

    async def _command(self, *args: Any) -> Any:
        """Run a single Redis command and return its result."""
        if not self.url:
            raise StoreError("Donation store not configured (UPSTASH_REDIS_REST_URL not set)")

        command = [str(arg) for arg in args]
        try:
            resp = await self._client.post(self.url, headers=self._headers(), json=command)
        except httpx.HTTPError as e:
            logger.error(f"Upstash {command[0]} failed: {e}")
            raise StoreError(f"Upstash request failed: {e}") from e

        if not resp.is_success:
            message = parse_upstash_error(resp.text)
            logger.error(f"Upstash {command[0]} error {resp.status_code}: {message}")
            raise StoreError(message)

        try:
            data = resp.json()
        except ValueError as e:
            logger.error(f"Upstash {command[0]} returned a non-JSON reply")
            raise StoreError(parse_upstash_error(resp.text)) from e
        if not isinstance(data, dict):
            logger.error(f"Upstash {command[0]} returned an unexpected reply")
            raise StoreError(f"Unexpected Upstash reply: {resp.text}")
        if data.get("error"):
            logger.error(f"Upstash {command[0]} error: {data['error']}")
            raise StoreError(data["error"])
        return data.get("result")

    async def push_event(self, event: DonationEvent) -> None:
        await self._command("RPUSH", self.queue_key, event.model_dump_json())

    async def pop_event(self) -> DonationEvent | None:
        result = await self._command("LPOP", self.queue_key)
        if result is None:
            return None

        try:
            if isinstance(result, (str, bytes)):
                return DonationEvent.model_validate_json(result)
            return DonationEvent.model_validate(result)
        except ValidationError as e:
            raise StoreError(f"Malformed queue entry: {result!r}") from e

    async def add_to_leaderboard(self, donator: str, amount: int | float) -> None:
        await self._command("ZINCRBY", self.leaderboard_key, amount, donator)

    async def leaderboard(self) -> list[Any]:
        result = await self._command("ZRANGE", self.leaderboard_key, 0, -1, "REV", "WITHSCORES") or []
        entries: list[Any] = []
        for member, score in zip(result[::2], result[1::2]):
            entries.extend([member, _parse_score(score)])
        return entries

    async def aclose(self) -> None:
        await self._client.aclose()

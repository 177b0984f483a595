import asyncio
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Optional

import requests

from utility.errors import TransientIOError
from utility.logger import get_logger
log = get_logger()

# For running the blocking status request off the event loop
executor = ThreadPoolExecutor(max_workers=1)

class Transition(Enum):
    BECAME_OFFLINE = "became_offline"
    BECAME_ONLINE = "became_online"


def fetch_status(url: str, online_token: str = "online", user_agent: str = "Mozilla/5.0",
                 timeout: float = 10) -> bool:
    """
    Ask the game status endpoint whether the server is up.
    Returns:
        bool: True iff the JSON body's "status" equals online_token.
    Raises:
        TransientIOError: On any transport error or unexpected response shape.
    """
    try:
        response = requests.get(url, headers={"User-Agent": user_agent}, timeout=timeout)
        response.raise_for_status()
        data = response.json()
    except (requests.RequestException, ValueError) as e:
        raise TransientIOError(f"Status fetch from {url} failed: {e}") from e

    if not isinstance(data, dict) or "status" not in data:
        raise TransientIOError(f"Status response from {url} has no status field: {data!r}")
    return data["status"] == online_token


class AvailabilityMonitor:
    """
    Debounces the status endpoint into Online/Offline and reports each edge once.
    Failed fetches are not a reading: the previous state is kept.
    """

    def __init__(self, url: str, online_token: str = "online", user_agent: str = "Mozilla/5.0",
                 timeout: float = 10, online: bool = True):
        self.url = url
        self.online_token = online_token
        self.user_agent = user_agent
        self.timeout = timeout
        self.online = online

    @classmethod
    def from_config(cls, status_config, online: bool = True) -> "AvailabilityMonitor":
        return cls(
            status_config.url,
            online_token=status_config.online_token,
            user_agent=status_config.user_agent,
            timeout=status_config.timeout_sec,
            online=online,
        )

    def observe(self, online: bool) -> Optional[Transition]:
        """Feed one reading. Returns the transition on a state change, else None."""
        if online == self.online:
            return None
        self.online = online
        if online:
            log.info("Availability: game server came back online")
            return Transition.BECAME_ONLINE
        log.info("Availability: game server went offline")
        return Transition.BECAME_OFFLINE

    async def fetch(self) -> bool:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(
            executor, fetch_status, self.url, self.online_token, self.user_agent, self.timeout
        )

    async def poll(self) -> Optional[Transition]:
        try:
            online = await self.fetch()
        except TransientIOError as e:
            log.warning(f"Availability: ignoring failed status check: {e}")
            return None
        return self.observe(online)

"""Search-as-you-type with stale response suppression."""

import logging

from savorist.client.api_client import SavoristClient
from savorist.errors import ApiError
from savorist.models import Restaurant

logger = logging.getLogger(__name__)


class RequestSequencer:
    """Hands out increasing sequence numbers; only the newest is current."""

    def __init__(self) -> None:
        self._latest = 0

    def issue(self) -> int:
        self._latest += 1
        return self._latest

    def is_current(self, token: int) -> bool:
        return token == self._latest


class SearchSession:
    """Keeps the results of the most recently issued search.

    When the user keeps typing, earlier requests may finish after later ones.
    Their responses are dropped instead of overwriting newer results.
    """

    def __init__(self, client: SavoristClient) -> None:
        self.client = client
        self.sequencer = RequestSequencer()
        self.query = ""
        self.results: list[Restaurant] = []

    async def search(self, query: str) -> list[Restaurant] | None:
        """Run a search and apply it if no newer search was issued meanwhile.

        Returns:
            The results, or None if the response was superseded

        Raises:
            ApiError: If the current (not superseded) request failed
        """
        token = self.sequencer.issue()
        try:
            results = await self.client.search(query)
        except ApiError:
            if not self.sequencer.is_current(token):
                logger.debug(f"Ignoring failure of superseded search '{query}'")
                return None
            raise

        if not self.sequencer.is_current(token):
            logger.debug(f"Discarding stale results for '{query}'")
            return None

        self.query = query
        self.results = results
        return results

"""
Session Registry

Keeps one `ArrangementStore` per editing session so that every session
has exactly one logical writer.
"""

import logging
from collections import OrderedDict
from typing import Optional

from seatplan.config import Settings, get_settings
from seatplan.core.errors import NotFound
from seatplan.core.ids import generate_id
from seatplan.core.store import ArrangementStore

logger = logging.getLogger(__name__)


class SessionRegistry:
    """
    In-memory sessions, bounded by `settings.max_sessions`.

    Opening a session beyond the bound evicts the least recently used one.
    Nothing is persisted: a caller that wants to keep an evicted or closed
    session exports it first.
    """

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()
        self._stores: "OrderedDict[str, ArrangementStore]" = OrderedDict()

    def create(self, table_limit: Optional[int] = None) -> str:
        """Open a session with an initialized store and return its id."""
        session_id = generate_id("session_", self._stores)
        store = ArrangementStore(table_limit=table_limit, settings=self.settings)
        store.initialize()
        self._stores[session_id] = store
        logger.info("Opened seating session %s (table limit %d)", session_id, store.table_limit)

        while len(self._stores) > self.settings.max_sessions:
            evicted, _ = self._stores.popitem(last=False)
            logger.warning("Evicted idle seating session %s (limit %d)", evicted, self.settings.max_sessions)
        return session_id

    def get(self, session_id: str) -> ArrangementStore:
        store = self._stores.get(session_id)
        if store is None:
            raise NotFound("session", session_id)
        self._stores.move_to_end(session_id)
        return store

    def close(self, session_id: str) -> None:
        if self._stores.pop(session_id, None) is None:
            raise NotFound("session", session_id)
        logger.info("Closed seating session %s", session_id)

    def __len__(self) -> int:
        return len(self._stores)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._stores

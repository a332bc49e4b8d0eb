"""
Tests for the session registry
"""

import pytest

from seatplan.config import Settings
from seatplan.core.errors import NotFound
from seatplan.core.sessions import SessionRegistry


@pytest.fixture
def registry():
    return SessionRegistry(Settings(max_sessions=2))


class TestSessionRegistry:
    """Test session lifecycle and the in-memory bound"""

    def test_create_returns_initialized_store(self, registry):
        session_id = registry.create(table_limit=3)
        store = registry.get(session_id)
        assert store.initialized
        assert store.table_limit == 3
        assert session_id in registry

    def test_close(self, registry):
        session_id = registry.create()
        registry.close(session_id)
        assert session_id not in registry
        with pytest.raises(NotFound):
            registry.get(session_id)
        with pytest.raises(NotFound):
            registry.close(session_id)

    def test_evicts_least_recently_used_beyond_limit(self, registry):
        first = registry.create()
        second = registry.create()
        registry.get(first)

        third = registry.create()

        assert len(registry) == 2
        assert second not in registry
        assert first in registry and third in registry

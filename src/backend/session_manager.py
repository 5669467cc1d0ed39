"""Binds OAuth tokens to opaque session ids in a key-value store."""

from __future__ import annotations

import logging
import secrets
import threading
import time
from typing import Protocol

from pydantic import ValidationError

from core.config import get_session_ttl_seconds
from core.errors import SessionNotFoundError
from core.schemas import Token

logger = logging.getLogger(__name__)


class KeyValueStore(Protocol):
    """Minimal key-value capability with per-key expiry."""

    def put(self, key: str, value: str, ttl_seconds: int) -> None: ...

    def get(self, key: str) -> str | None: ...


class InMemoryKeyValueStore:
    """Process-local store; entries vanish after their TTL.

    Expired entries are dropped on ``get`` and swept every ``purge_every``
    puts, so keys that are never read again do not accumulate.
    """

    def __init__(self, clock=time.monotonic, purge_every: int = 100):
        self._clock = clock
        self._entries: dict[str, tuple[str, float]] = {}
        self._lock = threading.Lock()
        self._purge_every = max(1, purge_every)
        self._puts_since_purge = 0

    def put(self, key: str, value: str, ttl_seconds: int) -> None:
        with self._lock:
            now = self._clock()
            self._entries[key] = (value, now + ttl_seconds)
            self._puts_since_purge += 1
            if self._puts_since_purge >= self._purge_every:
                removed = self._drop_expired(now)
                if removed:
                    logger.debug("Purged %d expired entries", removed)

    def get(self, key: str) -> str | None:
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            value, expires_at = entry
            if self._clock() >= expires_at:
                del self._entries[key]
                return None
            return value

    def purge_expired(self) -> int:
        """Drop expired entries and return how many were removed."""
        with self._lock:
            return self._drop_expired(self._clock())

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _drop_expired(self, now: float) -> int:
        # Caller holds the lock.
        expired = [k for k, (_, exp) in self._entries.items() if now >= exp]
        for key in expired:
            del self._entries[key]
        self._puts_since_purge = 0
        return len(expired)


def generate_session_id() -> str:
    return secrets.token_urlsafe(32)


class SessionManager:
    """Stores tokens under fresh session ids with a fixed TTL."""

    def __init__(self, store: KeyValueStore | None = None, ttl_seconds: int | None = None):
        self.store = store if store is not None else InMemoryKeyValueStore()
        self.ttl_seconds = ttl_seconds if ttl_seconds is not None else get_session_ttl_seconds()

    def bind(self, token: Token) -> str:
        """Persist a token and return the new session id."""
        session_id = generate_session_id()
        self.store.put(session_id, token.model_dump_json(), self.ttl_seconds)
        logger.info("Bound new session (ttl %ds)", self.ttl_seconds)
        return session_id

    def resolve(self, session_id: str | None) -> Token:
        """Look up the token bound to a session id.

        Expiry is enforced by the store; ``Token.expires_in`` is not checked.

        Raises:
            SessionNotFoundError: If the id is missing, unknown, expired, or
                the stored value cannot be decoded
        """
        if not session_id:
            raise SessionNotFoundError("No session cookie")

        data = self.store.get(session_id)
        if data is None:
            raise SessionNotFoundError("Invalid or expired session")

        try:
            return Token.model_validate_json(data)
        except ValidationError as e:
            logger.warning("Discarding undecodable session entry: %s", e)
            raise SessionNotFoundError("Invalid or expired session") from e


# Global session manager instance
session_manager = SessionManager()

"""Session management: signed session ids mapped to live tables in memory."""

from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from uuid import uuid4

from itsdangerous import URLSafeTimedSerializer, BadSignature, SignatureExpired

from config import config
from core.game import BlackjackTable


class SessionSigner:
    """Sign and verify session IDs using itsdangerous."""

    def __init__(self, secret_key: str | None = None) -> None:
        """Initialize the signer with a secret key."""
        self._secret_key = secret_key or config.security.secret_key
        self._serializer = URLSafeTimedSerializer(self._secret_key)

    def sign(self, session_id: str) -> str:
        """Create a signed token from a session ID."""
        return self._serializer.dumps(session_id)

    def unsign(self, token: str, max_age: int | None = None) -> str | None:
        """
        Verify and extract session_id from a signed token.

        Args:
            token: The signed token to verify
            max_age: Maximum age in seconds (defaults to session_ttl)

        Returns:
            The session ID if valid, None otherwise
        """
        max_age = max_age or config.session_ttl
        try:
            return self._serializer.loads(token, max_age=max_age)
        except (BadSignature, SignatureExpired):
            return None


# Global signer instance
_session_signer: SessionSigner | None = None


def get_session_signer() -> SessionSigner:
    """Get or create the session signer."""
    global _session_signer
    if _session_signer is None:
        _session_signer = SessionSigner()
    return _session_signer


class SessionStore(ABC):
    """Abstract store of tables keyed by session token."""

    @abstractmethod
    async def get(self, session_id: str) -> BlackjackTable | None:
        """Get the session's table."""
        ...

    @abstractmethod
    async def set(self, session_id: str, table: BlackjackTable, ttl: int | None = None) -> None:
        """Store the session's table and refresh its expiry."""
        ...

    @abstractmethod
    async def delete(self, session_id: str) -> None:
        """Delete session."""
        ...

    async def exists(self, session_id: str) -> bool:
        """Check if session exists."""
        return await self.get(session_id) is not None

    def create_session_id(self, signed: bool = True) -> str:
        """
        Create a new session ID.

        Args:
            signed: If True, return a signed session token

        Returns:
            A new session ID (signed or unsigned based on parameter)
        """
        session_id = str(uuid4())
        if signed:
            return get_session_signer().sign(session_id)
        return session_id


class InMemorySessionStore(SessionStore):
    """Process-local session store. Tables do not outlive the process."""

    def __init__(self) -> None:
        self._sessions: dict[str, tuple[BlackjackTable, datetime]] = {}

    async def get(self, session_id: str) -> BlackjackTable | None:
        if session_id not in self._sessions:
            return None

        table, expiry = self._sessions[session_id]
        if expiry < datetime.now():
            await self.delete(session_id)
            return None

        return table

    async def set(
        self,
        session_id: str,
        table: BlackjackTable,
        ttl: int | None = None,
    ) -> None:
        ttl = ttl or config.session_ttl
        expiry = datetime.now() + timedelta(seconds=ttl)
        self._sessions[session_id] = (table, expiry)

    async def delete(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    async def cleanup_expired(self) -> int:
        """Remove expired sessions."""
        now = datetime.now()
        expired = [
            sid for sid, (_, expiry) in self._sessions.items() if expiry < now
        ]
        for sid in expired:
            del self._sessions[sid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._sessions)


# Global session store instance
_session_store: SessionStore | None = None


async def get_session_store() -> SessionStore:
    """Get or create the session store."""
    global _session_store
    if _session_store is None:
        _session_store = InMemorySessionStore()
    return _session_store


async def create_session(table: BlackjackTable) -> str:
    """Create a new session holding `table` and return its signed token."""
    store = await get_session_store()
    session_id = store.create_session_id()
    await store.set(session_id, table)
    return session_id


async def get_session(session_id: str) -> BlackjackTable | None:
    """Get the table of a session, or None if the token is invalid or expired."""
    if extract_session_id(session_id) is None:
        return None
    store = await get_session_store()
    return await store.get(session_id)


async def touch_session(session_id: str, table: BlackjackTable) -> None:
    """Refresh a session's expiry."""
    store = await get_session_store()
    await store.set(session_id, table)


async def delete_session(session_id: str) -> None:
    """Delete a session."""
    store = await get_session_store()
    await store.delete(session_id)


def extract_session_id(token: str) -> str | None:
    """
    Extract the raw session ID from a signed token.

    Args:
        token: The signed session token

    Returns:
        The raw session ID if valid, None otherwise
    """
    return get_session_signer().unsign(token)

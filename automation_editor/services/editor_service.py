"""
Editor Service
Service layer wrapper that owns the open editor sessions
"""
from typing import Dict, List, Optional

from automation_editor.catalog.catalog import Catalog, get_catalog
from automation_editor.core.config import get_settings
from automation_editor.core.constants import EditorState
from automation_editor.core.errors import NotFound
from automation_editor.core.logging import get_logger
from automation_editor.editor.session import EditorSession
from automation_editor.schemas.api_models import AutomationDefinition
from automation_editor.services.automation_client import AutomationApiClient
from automation_editor.utils.ids import generate_session_id
from automation_editor.utils.time import is_older_than, now

logger = get_logger(__name__)


class EditorService:
    """
    Service layer for editor sessions

    Responsibilities:
    - Open / look up / close editor sessions
    - Share one persistence API client between sessions
    - Drop sessions left idle for longer than the idle timeout

    Each session is owned by a single client (one browser tab), so sessions
    are plain in-process objects without locking. Abandoned tabs never close
    their session; idle eviction runs whenever a session is opened or looked up.
    """

    def __init__(
        self,
        client: Optional[AutomationApiClient] = None,
        catalog: Optional[Catalog] = None,
        idle_timeout_seconds: Optional[int] = None
    ):
        """Initialize editor service"""
        self._client = client or AutomationApiClient()
        self._catalog = catalog or get_catalog()
        self._sessions: Dict[str, EditorSession] = {}
        if idle_timeout_seconds is None:
            idle_timeout_seconds = get_settings().SESSION_IDLE_TIMEOUT_SECONDS
        self.idle_timeout_seconds = idle_timeout_seconds
        logger.info("EditorService initialized")

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def open_session(
        self,
        definition: Optional[AutomationDefinition] = None,
        is_new: bool = False
    ) -> EditorSession:
        """
        Open a new editor session

        Args:
            definition: Existing automation to edit
            is_new: Start from the default trigger node

        Returns:
            The open EditorSession
        """
        self.evict_idle_sessions()

        session = EditorSession(generate_session_id(), self._client, self._catalog)
        session.open(definition, is_new=is_new)
        self._sessions[session.session_id] = session

        logger.info(f"Session opened: {session.session_id} (total: {len(self._sessions)})")
        return session

    def get_session(self, session_id: str) -> EditorSession:
        """
        Get open session and mark it active

        Raises:
            NotFound: If there is no session with this ID, or it expired
        """
        self.evict_idle_sessions()

        session = self._sessions.get(session_id)
        if session is None:
            raise NotFound(f"Editor session '{session_id}' not found", details={"session_id": session_id})
        session.last_active = now()
        return session

    def close_session(self, session_id: str) -> None:
        session = self.get_session(session_id)
        session.close()
        del self._sessions[session_id]
        logger.info(f"Session closed: {session_id}")

    def forget_session(self, session_id: str) -> None:
        """Drop a session that closed itself (e.g. after a successful save)"""
        self._sessions.pop(session_id, None)

    def evict_idle_sessions(self) -> List[str]:
        """
        Close and drop sessions idle for longer than the idle timeout

        Sessions in the middle of a save are kept.

        Returns:
            IDs of the evicted sessions
        """
        if self.idle_timeout_seconds <= 0:
            return []

        expired = [
            session_id
            for session_id, session in self._sessions.items()
            if session.state != EditorState.SAVING
            and is_older_than(session.last_active, self.idle_timeout_seconds)
        ]
        for session_id in expired:
            self._sessions.pop(session_id).close()

        if expired:
            logger.info(f"Evicted {len(expired)} idle session(s): {expired}")
        return expired

    def list_sessions(self) -> List[str]:
        return list(self._sessions)


# ============================================================================
# SINGLETON INSTANCE (optional, or use dependency injection)
# ============================================================================

_editor_service: Optional[EditorService] = None


def get_editor_service() -> EditorService:
    """
    Get singleton editor service instance

    Returns:
        EditorService instance
    """
    global _editor_service

    if _editor_service is None:
        _editor_service = EditorService()

    return _editor_service

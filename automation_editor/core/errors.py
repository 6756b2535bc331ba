"""
Editor Error Types
Structured exceptions raised by the graph model, the serializer and the session
"""
from typing import Optional, Dict, Any

from automation_editor.core.constants import ErrorCode


# ============================================================================
# BASE EXCEPTION
# ============================================================================

class EditorError(Exception):
    """
    Base exception for editor failures

    Every editor error is scoped to one session and recoverable by the user.
    `title` and `description` are the texts shown in the notification.
    """
    code: str = "E0000"
    title: str = "Something went wrong"

    def __init__(
        self,
        message: str,
        description: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        self.description = description or message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for API response"""
        return {
            "error": type(self).__name__,
            "code": self.code,
            "title": self.title,
            "message": self.message,
            "details": self.details
        }


# ============================================================================
# GRAPH ERRORS
# ============================================================================

class NotFound(EditorError):
    """A node or connection id does not exist in the graph"""
    code = ErrorCode.NOT_FOUND
    title = "Not found"


class DuplicateId(EditorError):
    """A node with the same id is already in the graph"""
    code = ErrorCode.DUPLICATE_ID
    title = "Duplicate id"


class DuplicateTrigger(EditorError):
    """The graph already holds its trigger node"""
    code = ErrorCode.DUPLICATE_TRIGGER
    title = "Trigger already exists"


class CannotDeleteTrigger(EditorError):
    """The trigger node is required and cannot be removed"""
    code = ErrorCode.CANNOT_DELETE_TRIGGER
    title = "Cannot delete trigger"

    def __init__(self, node_id: str):
        super().__init__(
            f"Cannot delete trigger node '{node_id}'",
            description="The trigger node is required for the workflow.",
            details={"node_id": node_id}
        )


class InvalidConnection(EditorError):
    """Connection endpoints are not acceptable (e.g. a self-loop)"""
    code = ErrorCode.INVALID_CONNECTION
    title = "Invalid connection"


class UnknownSubtype(EditorError):
    """A trigger or action subtype is not in the catalog"""
    code = ErrorCode.UNKNOWN_SUBTYPE
    title = "Unknown type"

    def __init__(self, subtype: str, kind: str):
        super().__init__(
            f"Unknown {kind} type '{subtype}'",
            details={"subtype": subtype, "kind": kind}
        )


class InvalidConfig(EditorError):
    """Node configuration does not fit the config model of its subtype"""
    code = ErrorCode.INVALID_CONFIG
    title = "Invalid configuration"


# ============================================================================
# SAVE VALIDATION ERRORS
# ============================================================================

class MissingTrigger(EditorError):
    """No trigger node, or the trigger has no subtype selected"""
    code = ErrorCode.MISSING_TRIGGER
    title = "Trigger required"

    def __init__(self):
        super().__init__(
            "Workflow has no trigger type selected",
            description="Please select a trigger type for your workflow."
        )


class MissingName(EditorError):
    """The automation name is empty"""
    code = ErrorCode.MISSING_NAME
    title = "Workflow name required"

    def __init__(self):
        super().__init__(
            "Workflow name is empty",
            description="Please enter a name for your workflow."
        )


# ============================================================================
# SESSION AND API ERRORS
# ============================================================================

class InvalidEditorState(EditorError):
    """Operation is not allowed in the current editor lifecycle state"""
    code = ErrorCode.INVALID_EDITOR_STATE
    title = "Editor not ready"


class AutomationApiError(EditorError):
    """The persistence API rejected or failed the save call"""
    code = ErrorCode.AUTOMATION_API_ERROR
    title = "Failed to save workflow"

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(
            message,
            description="Your changes are kept. Please try saving again.",
            details={"status_code": status_code} if status_code is not None else None
        )
        self.status_code = status_code

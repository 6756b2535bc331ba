"""
Core Constants and Enums
Central source of truth for node kinds, editor states and error codes
"""
from enum import Enum


# ============================================================================
# GRAPH NODE KINDS
# ============================================================================

class NodeKind(str, Enum):
    """
    Kinds of nodes on the editor canvas

    TRIGGER: The single entry-point event of an automation
    ACTION: One step executed when the automation fires
    CONDITION: Branch node (catalogued, not created by the editor gestures)
    """
    TRIGGER = "trigger"
    ACTION = "action"
    CONDITION = "condition"


# ============================================================================
# EDITOR LIFECYCLE STATES
# ============================================================================

class EditorState(str, Enum):
    """
    Editor session lifecycle

    CLOSED: No graph loaded
    EDITING: Graph loaded, accepting gestures
    SAVING: Payload handed to the persistence API, awaiting the outcome
    """
    CLOSED = "closed"
    EDITING = "editing"
    SAVING = "saving"


class ActionOrdering(str, Enum):
    """
    How the serializer orders action nodes

    TOPOLOGY: Follow connections from the trigger, ties broken by y
    POSITION: Sort by vertical position only
    """
    TOPOLOGY = "topology"
    POSITION = "position"


class NotificationVariant(str, Enum):
    """Visual variant of a user-facing notification"""
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


# ============================================================================
# WELL-KNOWN IDS
# ============================================================================

TRIGGER_NODE_ID = "trigger_1"
ACTION_NODE_PREFIX = "action"
CONNECTION_PREFIX = "conn"
DEFAULT_TRIGGER_NAME = "Select a Trigger"


# ============================================================================
# ERROR CODES
# ============================================================================

class ErrorCode:
    """
    System error codes for debugging and monitoring
    """
    # Graph errors (1xxx)
    NOT_FOUND = "E1001"
    DUPLICATE_ID = "E1002"
    DUPLICATE_TRIGGER = "E1003"
    CANNOT_DELETE_TRIGGER = "E1004"
    INVALID_CONNECTION = "E1005"
    UNKNOWN_SUBTYPE = "E1006"
    INVALID_CONFIG = "E1007"

    # Save validation errors (2xxx)
    MISSING_TRIGGER = "E2001"
    MISSING_NAME = "E2002"

    # Session errors (3xxx)
    INVALID_EDITOR_STATE = "E3001"

    # Persistence API errors (4xxx)
    AUTOMATION_API_ERROR = "E4001"

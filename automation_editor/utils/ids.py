"""
ID Generation Utilities
Generates unique IDs for editor sessions
"""
import uuid


def generate_session_id(prefix: str = "sess") -> str:
    """
    Generate editor session ID

    Args:
        prefix: Optional prefix (default: "sess")

    Returns:
        Session ID (e.g., "sess_7f3b4c2a1d8e")
    """
    uuid_short = uuid.uuid4().hex[:12]
    return f"{prefix}_{uuid_short}"

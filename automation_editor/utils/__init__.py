"""
Utilities Module
Shared utility functions for the application
"""
from automation_editor.utils.ids import generate_session_id
from automation_editor.utils.time import now, is_older_than

__all__ = ["generate_session_id", "now", "is_older_than"]

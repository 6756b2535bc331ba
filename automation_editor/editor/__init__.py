"""
Editor module.
Lifecycle, selection and drag state of an open automation editor.
"""
from .session import EditorSession, Notification

__all__ = ["EditorSession", "Notification"]

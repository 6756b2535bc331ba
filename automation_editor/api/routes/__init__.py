"""
External API Routes
Export all routers for main.py to include
"""
from automation_editor.api.routes import (
    health,
    catalog,
    editor
)

__all__ = [
    "health",
    "catalog",
    "editor"
]

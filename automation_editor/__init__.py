"""
Workflow Automation Editor
In-memory workflow graph model behind the visual automation editor
"""

__version__ = "1.0.0"

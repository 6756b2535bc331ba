"""
Layout
Node placement, drag math and connection geometry for the editor canvas
"""
from typing import Any, Dict, List, Optional, Tuple

from automation_editor.core.logging import get_logger
from automation_editor.graph.models import Node, Position
from automation_editor.graph.store import WorkflowGraph

logger = get_logger(__name__)


# ============================================================================
# LAYOUT CONSTANTS
# ============================================================================

# Node dimensions
NODE_WIDTH = 240
NODE_HEIGHT = 40

# Placement
COLUMN_X = 100
TRIGGER_Y = 100
FIRST_ACTION_Y = 250
VERTICAL_SPACING = 150


# ============================================================================
# PLACEMENT
# ============================================================================

def lowest_node(graph: WorkflowGraph) -> Optional[Node]:
    """
    Node with the greatest y

    Ties go to the node added last (stable sort by y, take the tail).
    """
    nodes = sorted(graph.nodes, key=lambda n: n.position.y)
    return nodes[-1] if nodes else None


def next_action_position(graph: WorkflowGraph) -> Position:
    """Position for a new action: one row below the lowest node"""
    lowest = lowest_node(graph)
    if lowest is None:
        return Position(x=COLUMN_X, y=TRIGGER_Y)
    return Position(x=COLUMN_X, y=lowest.position.y + VERTICAL_SPACING)


def action_row_position(index: int) -> Position:
    """Position of the index-th action when a chain is laid out top-down"""
    return Position(x=COLUMN_X, y=FIRST_ACTION_Y + index * VERTICAL_SPACING)


def trigger_position() -> Position:
    return Position(x=COLUMN_X, y=TRIGGER_Y)


# ============================================================================
# DRAG MATH
# ============================================================================

def drag_offset(pointer: Tuple[float, float], position: Position) -> Tuple[float, float]:
    """
    Pointer offset from the node's top-left corner at drag start

    Keeping this offset while dragging stops the node from jumping so that
    its corner sits under the cursor.
    """
    return pointer[0] - position.x, pointer[1] - position.y


def dragged_position(pointer: Tuple[float, float], offset: Tuple[float, float]) -> Position:
    return Position(x=pointer[0] - offset[0], y=pointer[1] - offset[1])


# ============================================================================
# CONNECTION GEOMETRY
# ============================================================================

def connection_path(source: Node, target: Node) -> str:
    """
    SVG path from the bottom centre of source to the top centre of target
    """
    source_x = source.position.x + NODE_WIDTH / 2
    source_y = source.position.y + NODE_HEIGHT
    target_x = target.position.x + NODE_WIDTH / 2
    target_y = target.position.y

    return f"M{source_x:g},{source_y:g} L{target_x:g},{target_y:g}"


def connection_paths(graph: WorkflowGraph) -> List[Dict[str, Any]]:
    """Rendered path for every connection"""
    paths = []
    for connection in graph.connections:
        source = graph.get_node(connection.source)
        target = graph.get_node(connection.target)
        paths.append({
            "id": connection.id,
            "path": connection_path(source, target)
        })
    return paths


# ============================================================================
# AUTO LAYOUT
# ============================================================================

def stack_layout(graph: WorkflowGraph, ordered_actions: List[Node]) -> Dict[str, Dict[str, float]]:
    """
    Restack nodes in a single column: trigger on top, actions below in order

    Args:
        graph: Workflow graph
        ordered_actions: Action nodes in execution order

    Returns:
        Dictionary mapping node_id to its new position {x, y}
    """
    logger.debug(f"Applying stack layout to {len(ordered_actions)} actions")

    trigger = graph.trigger_node()
    if trigger is not None:
        trigger.position = trigger_position()

    for index, node in enumerate(ordered_actions):
        node.position = action_row_position(index)

    return {node.id: node.position.to_dict() for node in graph.nodes}

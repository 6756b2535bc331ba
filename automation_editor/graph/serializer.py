"""
Serializer
Flattens the editor graph into the linear automation definition
"""
from typing import Dict, List, Optional, Set

from automation_editor.core.config import get_settings
from automation_editor.core.constants import ActionOrdering
from automation_editor.core.errors import MissingName, MissingTrigger
from automation_editor.core.logging import get_logger
from automation_editor.graph.models import Node
from automation_editor.graph.store import WorkflowGraph
from automation_editor.schemas.api_models import ActionPayload, AutomationPayload

logger = get_logger(__name__)


# ============================================================================
# ACTION ORDERING
# ============================================================================

def order_by_position(graph: WorkflowGraph) -> List[Node]:
    """Action nodes sorted by y (stable, so ties keep insertion order)"""
    return sorted(graph.action_nodes(), key=lambda n: n.position.y)


def order_by_topology(graph: WorkflowGraph) -> List[Node]:
    """
    Action nodes in connection order from the trigger

    Kahn's algorithm over the subgraph reachable from the trigger; among
    nodes that are ready at the same time the one higher on the canvas goes
    first. Action nodes that are unreachable, or stuck in a cycle, follow
    in ascending y.
    """
    trigger = graph.trigger_node()
    actions = {node.id: node for node in graph.action_nodes()}

    reachable: Set[str] = set()
    if trigger is not None:
        stack = [trigger.id]
        while stack:
            current = stack.pop()
            for target in graph.successors(current):
                if target in actions and target not in reachable:
                    reachable.add(target)
                    stack.append(target)

    in_degree: Dict[str, int] = {node_id: 0 for node_id in reachable}
    for connection in graph.connections:
        if connection.target in reachable and connection.source in reachable:
            in_degree[connection.target] += 1

    def by_y(node_id: str) -> float:
        return actions[node_id].position.y

    # Nodes fed only by the trigger start ready
    ready = sorted((n for n, d in in_degree.items() if d == 0), key=by_y)
    ordered: List[Node] = []

    while ready:
        current = ready.pop(0)
        ordered.append(actions[current])
        for target in graph.successors(current):
            if target in in_degree:
                in_degree[target] -= 1
                if in_degree[target] == 0:
                    ready.append(target)
        ready.sort(key=by_y)

    placed = {node.id for node in ordered}
    leftovers = [node for node in order_by_position(graph) if node.id not in placed]
    if leftovers:
        logger.warning(
            f"{len(leftovers)} action(s) not connected in order from the trigger; "
            f"ordering them by position: {[n.id for n in leftovers]}"
        )

    return ordered + leftovers


def order_actions(
    graph: WorkflowGraph,
    ordering: Optional[ActionOrdering] = None
) -> List[Node]:
    """Action nodes in execution order using the configured strategy"""
    if ordering is None:
        ordering = ActionOrdering(get_settings().ACTION_ORDERING)

    if ordering == ActionOrdering.POSITION:
        return order_by_position(graph)
    return order_by_topology(graph)


# ============================================================================
# SERIALIZER
# ============================================================================

def serialize_graph(
    graph: WorkflowGraph,
    name: str,
    description: str = "",
    ordering: Optional[ActionOrdering] = None
) -> AutomationPayload:
    """
    Flatten the graph into the automation definition

    Args:
        graph: Workflow graph
        name: Automation name
        description: Automation description
        ordering: Action ordering strategy (defaults to settings)

    Returns:
        AutomationPayload ready for the persistence API

    Raises:
        MissingTrigger: If there is no trigger or its subtype is unset
        MissingName: If the name is empty
    """
    trigger = graph.trigger_node()
    if trigger is None or not trigger.subtype:
        raise MissingTrigger()

    if not name or not name.strip():
        raise MissingName()

    actions = [
        ActionPayload(
            id=node.subtype,
            name=node.display_name,
            config=node.config.as_dict()
        )
        for node in order_actions(graph, ordering)
        if node.subtype
    ]

    payload = AutomationPayload(
        name=name,
        description=description or "",
        is_active=True,
        trigger_type=trigger.subtype,
        trigger_config=trigger.config.as_dict(),
        actions=actions
    )

    logger.info(f"Serialized automation '{name}': {trigger.subtype} + {len(actions)} actions")
    return payload

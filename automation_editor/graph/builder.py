"""
Graph Builder
Seeds an editor graph from an existing automation definition
"""
from typing import Optional

from automation_editor.catalog.catalog import Catalog, get_catalog
from automation_editor.core.constants import (
    ACTION_NODE_PREFIX,
    DEFAULT_TRIGGER_NAME,
    NodeKind,
    TRIGGER_NODE_ID
)
from automation_editor.core.logging import get_logger
from automation_editor.graph.layout import action_row_position, trigger_position
from automation_editor.graph.models import Node
from automation_editor.graph.store import WorkflowGraph
from automation_editor.schemas.api_models import AutomationDefinition

logger = get_logger(__name__)


class GraphBuilder:
    """
    Converts an automation definition into an editor graph

    Produces a single column: trigger_1 on top, then action_1..action_n,
    chained trigger_1 -> action_1 -> action_2 -> ...

    Usage:
        builder = GraphBuilder()
        graph = builder.build_graph(definition)   # existing automation
        graph = builder.build_default_graph()     # new automation
    """

    def __init__(self, catalog: Optional[Catalog] = None):
        self.catalog = catalog or get_catalog()

    def build_default_graph(self) -> WorkflowGraph:
        """Graph holding only an unset trigger node"""
        graph = WorkflowGraph()
        graph.add_node(Node(
            id=TRIGGER_NODE_ID,
            kind=NodeKind.TRIGGER,
            subtype="",
            display_name=DEFAULT_TRIGGER_NAME,
            position=trigger_position(),
            config=self.catalog.build_config(NodeKind.TRIGGER, None)
        ))
        return graph

    def build_graph(self, definition: AutomationDefinition) -> WorkflowGraph:
        """
        Build graph from an existing automation

        Args:
            definition: Automation definition from the persistence API

        Returns:
            WorkflowGraph with the trigger and chained actions

        Raises:
            UnknownSubtype: If the trigger or an action is not in the catalog
        """
        logger.info(f"Building graph for automation: {definition.name or '<unnamed>'}")

        trigger_type = definition.resolved_trigger_type
        if not trigger_type:
            # Nothing to seed the trigger from: start like a new automation
            graph = self.build_default_graph()
        else:
            entry = self.catalog.get(NodeKind.TRIGGER, trigger_type)
            graph = WorkflowGraph()
            graph.add_node(Node(
                id=TRIGGER_NODE_ID,
                kind=NodeKind.TRIGGER,
                subtype=entry.id,
                display_name=entry.name,
                position=trigger_position(),
                config=self.catalog.build_config(NodeKind.TRIGGER, entry.id, definition.trigger_config)
            ))

        previous_id = TRIGGER_NODE_ID
        for index, action in enumerate(definition.actions):
            entry = self.catalog.get(NodeKind.ACTION, action.id)
            node = graph.add_node(Node(
                id=f"{ACTION_NODE_PREFIX}_{index + 1}",
                kind=NodeKind.ACTION,
                subtype=entry.id,
                display_name=action.name or entry.name,
                position=action_row_position(index),
                config=self.catalog.build_config(NodeKind.ACTION, entry.id, action.config)
            ))
            graph.add_connection(previous_id, node.id)
            previous_id = node.id

        logger.info(
            f"Built graph: {len(graph.nodes)} nodes, {len(graph.connections)} connections"
        )
        return graph

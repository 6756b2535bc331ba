"""
Graph Mutator
Translates editor gestures into node and connection store operations
"""
from typing import Any, Dict, Optional

from automation_editor.catalog.catalog import Catalog, get_catalog
from automation_editor.core.constants import NodeKind
from automation_editor.core.logging import get_logger
from automation_editor.graph.layout import lowest_node, next_action_position
from automation_editor.graph.models import Connection, Node, Position
from automation_editor.graph.store import WorkflowGraph

logger = get_logger(__name__)


class GraphMutator:
    """
    Applies editor gestures to a workflow graph

    Adding actions only through add_action keeps the graph a single linear
    chain: every new node hangs off the node that was lowest on the canvas.
    Dragging moves nodes but never rewires them.

    Usage:
        mutator = GraphMutator(graph)
        node = mutator.add_action("send_email")
        mutator.update_config(node.id, {"template": "welcome"})
        mutator.reposition(node.id, 300, 250)
    """

    def __init__(self, graph: WorkflowGraph, catalog: Optional[Catalog] = None):
        self.graph = graph
        self.catalog = catalog or get_catalog()

    def add_action(self, subtype: str) -> Node:
        """
        Add an action node below the lowest node and chain it

        Args:
            subtype: Action catalog id

        Returns:
            The new node

        Raises:
            UnknownSubtype: If the subtype is not in the action catalog
        """
        entry = self.catalog.get(NodeKind.ACTION, subtype)

        # Chain end is decided before the new node joins the graph
        trigger = self.graph.trigger_node()
        if trigger is not None and len(self.graph.nodes) == 1:
            chain_end = trigger
        else:
            chain_end = lowest_node(self.graph)

        node = Node(
            id=self.graph.next_action_id(),
            kind=NodeKind.ACTION,
            subtype=entry.id,
            display_name=entry.name,
            position=next_action_position(self.graph),
            config=self.catalog.build_config(NodeKind.ACTION, entry.id)
        )
        self.graph.add_node(node)

        if chain_end is not None:
            self.graph.add_connection(chain_end.id, node.id)

        logger.info(f"Added action: {node.id} ({subtype})")
        return node

    def reposition(self, node_id: str, x: float, y: float) -> Node:
        """Move a node; connections are left untouched"""
        return self.graph.update_node(node_id, position=Position(x=x, y=y))

    def delete_node(self, node_id: str) -> None:
        """
        Delete a node and its connections

        Raises:
            NotFound: If no node has this ID
            CannotDeleteTrigger: If the node is the trigger
        """
        self.graph.remove_node(node_id)

    def update_subtype(self, node_id: str, subtype: str) -> Node:
        """
        Change the catalog subtype of a node

        The display name resets to the catalog name and the current config
        is re-typed under the new subtype's config model.

        Raises:
            NotFound: If no node has this ID
            UnknownSubtype: If the subtype is not catalogued for the node's kind
        """
        node = self.graph.get_node(node_id)
        entry = self.catalog.get(node.kind, subtype)
        config = self.catalog.build_config(node.kind, entry.id, node.config.as_dict())

        logger.info(f"Changing {node.kind.value} type of {node_id}: {node.subtype or '-'} -> {subtype}")

        return self.graph.update_node(
            node_id,
            subtype=entry.id,
            display_name=entry.name,
            config=config
        )

    def rename(self, node_id: str, display_name: str) -> Node:
        return self.graph.update_node(node_id, display_name=display_name)

    def update_config(self, node_id: str, config: Dict[str, Any]) -> Node:
        """Merge config values into the node's typed config"""
        return self.graph.update_node(node_id, config=config)

    def edit_node(
        self,
        node_id: str,
        display_name: Optional[str] = None,
        subtype: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> Node:
        """
        Apply a config panel edit as a whole

        A new subtype resets the name to the catalog name unless one is
        given, and the config is validated against the new subtype's model.
        Nothing changes if any part is rejected.

        Raises:
            NotFound: If no node has this ID
            UnknownSubtype: If the subtype is not catalogued for the node's kind
            InvalidConfig: If the resulting config does not validate
        """
        node = self.graph.get_node(node_id)
        fields: Dict[str, Any] = {}

        if subtype is not None:
            entry = self.catalog.get(node.kind, subtype)
            data = {**node.config.as_dict(), **(config or {})}
            fields["subtype"] = entry.id
            fields["display_name"] = entry.name
            fields["config"] = self.catalog.build_config(node.kind, entry.id, data)
        elif config is not None:
            fields["config"] = config

        if display_name is not None:
            fields["display_name"] = display_name

        if not fields:
            return node
        return self.graph.update_node(node_id, **fields)

    def connect(self, source: str, target: str) -> Connection:
        return self.graph.add_connection(source, target)

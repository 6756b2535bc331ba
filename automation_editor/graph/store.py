"""
Node and Connection Store
Holds the current graph state and keeps connections consistent with nodes
"""
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from automation_editor.catalog.configs import NodeConfig
from automation_editor.core.constants import ACTION_NODE_PREFIX, CONNECTION_PREFIX
from automation_editor.core.errors import (
    CannotDeleteTrigger,
    DuplicateId,
    DuplicateTrigger,
    InvalidConfig,
    InvalidConnection,
    NotFound
)
from automation_editor.core.logging import get_logger
from automation_editor.graph.models import Connection, Node, Position

logger = get_logger(__name__)

UPDATABLE_FIELDS = ("position", "config", "subtype", "display_name")


class WorkflowGraph:
    """
    In-memory workflow graph

    Invariants:
    - at most one trigger node is ever stored (the builder always adds it)
    - every connection references two nodes currently in the store

    Usage:
        graph = WorkflowGraph()
        graph.add_node(trigger)
        graph.add_node(action)
        graph.add_connection(trigger.id, action.id)
    """

    def __init__(self):
        # Insertion-ordered; stable sorts by y rely on it
        self._nodes: Dict[str, Node] = {}
        self._connections: Dict[str, Connection] = {}

    # ------------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------------

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    @property
    def connections(self) -> List[Connection]:
        return list(self._connections.values())

    def has_node(self, node_id: str) -> bool:
        return node_id in self._nodes

    def get_node(self, node_id: str) -> Node:
        """
        Get node by ID

        Raises:
            NotFound: If no node has this ID
        """
        node = self._nodes.get(node_id)
        if node is None:
            raise NotFound(f"Node '{node_id}' not found", details={"node_id": node_id})
        return node

    def trigger_node(self) -> Optional[Node]:
        for node in self._nodes.values():
            if node.is_trigger:
                return node
        return None

    def action_nodes(self) -> List[Node]:
        """All non-trigger nodes, in insertion order"""
        return [node for node in self._nodes.values() if not node.is_trigger]

    def get_connection(self, connection_id: str) -> Connection:
        connection = self._connections.get(connection_id)
        if connection is None:
            raise NotFound(
                f"Connection '{connection_id}' not found",
                details={"connection_id": connection_id}
            )
        return connection

    def connections_for(self, node_id: str) -> List[Connection]:
        """Connections where the node is source or target"""
        return [c for c in self._connections.values() if c.touches(node_id)]

    def successors(self, node_id: str) -> List[str]:
        return [c.target for c in self._connections.values() if c.source == node_id]

    def find_connection(self, source: str, target: str) -> Optional[Connection]:
        for connection in self._connections.values():
            if connection.source == source and connection.target == target:
                return connection
        return None

    # ------------------------------------------------------------------------
    # Node operations
    # ------------------------------------------------------------------------

    def add_node(self, node: Node) -> Node:
        """
        Insert a node

        Raises:
            DuplicateId: If a node with the same ID exists
            DuplicateTrigger: If the node is a trigger and one already exists
        """
        if node.id in self._nodes:
            raise DuplicateId(f"Node '{node.id}' already exists", details={"node_id": node.id})

        if node.is_trigger and self.trigger_node() is not None:
            raise DuplicateTrigger(
                "Workflow already has a trigger node",
                details={"node_id": node.id}
            )

        self._nodes[node.id] = node
        logger.debug(f"Added node: {node.id} ({node.kind.value})")
        return node

    def remove_node(self, node_id: str) -> List[Connection]:
        """
        Remove a node and every connection that references it

        Returns:
            The removed connections

        Raises:
            NotFound: If no node has this ID
            CannotDeleteTrigger: If the node is the trigger
        """
        node = self.get_node(node_id)
        if node.is_trigger:
            raise CannotDeleteTrigger(node_id)

        removed = self.connections_for(node_id)
        for connection in removed:
            del self._connections[connection.id]
        del self._nodes[node_id]

        logger.info(f"Removed node: {node_id} ({len(removed)} connections)")
        return removed

    def update_node(self, node_id: str, **fields: Any) -> Node:
        """
        Merge fields into an existing node

        Args:
            node_id: Node to update
            **fields: Any of position, config, subtype, display_name.
                A config dict is merged key by key into the current config;
                a NodeConfig instance replaces it.

        Returns:
            The updated node

        Raises:
            NotFound: If no node has this ID
            InvalidConfig: If the merged config does not validate
        """
        unknown = set(fields) - set(UPDATABLE_FIELDS)
        if unknown:
            raise ValueError(f"Cannot update node fields: {sorted(unknown)}")

        node = self.get_node(node_id)

        # Everything is validated before any field is assigned
        config = node.config
        if "config" in fields:
            config = fields["config"]
            if not isinstance(config, NodeConfig):
                try:
                    config = node.config.merged(config or {})
                except PydanticValidationError as e:
                    raise InvalidConfig(
                        f"Invalid config for node '{node_id}': {e.error_count()} errors",
                        details={"node_id": node_id, "errors": [err["msg"] for err in e.errors()]}
                    )

        position = node.position
        if "position" in fields:
            position = self._coerce_position(fields["position"])

        node.position = position
        node.config = config
        if "subtype" in fields:
            node.subtype = fields["subtype"] or ""
        if "display_name" in fields:
            node.display_name = fields["display_name"]

        logger.debug(f"Updated node: {node_id} ({', '.join(sorted(fields))})")
        return node

    # ------------------------------------------------------------------------
    # Connection operations
    # ------------------------------------------------------------------------

    def add_connection(self, source: str, target: str) -> Connection:
        """
        Connect source -> target

        Adding an edge that already exists returns the existing connection.

        Raises:
            NotFound: If either endpoint is missing
            InvalidConnection: If source and target are the same node
        """
        self.get_node(source)
        self.get_node(target)

        if source == target:
            raise InvalidConnection(
                f"Cannot connect node '{source}' to itself",
                details={"source": source, "target": target}
            )

        existing = self.find_connection(source, target)
        if existing:
            return existing

        connection = Connection(
            id=self._next_connection_id(source, target),
            source=source,
            target=target
        )
        self._connections[connection.id] = connection

        logger.debug(f"Added connection: {source} -> {target}")
        return connection

    def remove_connection(self, connection_id: str) -> Connection:
        connection = self.get_connection(connection_id)
        del self._connections[connection_id]
        logger.debug(f"Removed connection: {connection.source} -> {connection.target}")
        return connection

    # ------------------------------------------------------------------------
    # ID generation
    # ------------------------------------------------------------------------

    def next_action_id(self) -> str:
        """Next free action_<n> id; never reuses an id still in the graph"""
        n = len(self.action_nodes()) + 1
        while f"{ACTION_NODE_PREFIX}_{n}" in self._nodes:
            n += 1
        return f"{ACTION_NODE_PREFIX}_{n}"

    def _next_connection_id(self, source: str, target: str) -> str:
        base = f"{CONNECTION_PREFIX}_{source}_{target}"
        connection_id = base
        suffix = 2
        while connection_id in self._connections:
            connection_id = f"{base}_{suffix}"
            suffix += 1
        return connection_id

    @staticmethod
    def _coerce_position(value: Any) -> Position:
        if isinstance(value, Position):
            return value
        if isinstance(value, dict):
            return Position(x=value["x"], y=value["y"])
        x, y = value
        return Position(x=x, y=y)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "nodes": [node.to_dict() for node in self._nodes.values()],
            "connections": [c.to_dict() for c in self._connections.values()]
        }

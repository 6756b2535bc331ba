"""
Graph Structures
Nodes and connections of the editor canvas
"""
from dataclasses import dataclass, field
from typing import Any, Dict

from automation_editor.catalog.configs import NodeConfig
from automation_editor.core.constants import NodeKind


@dataclass
class Position:
    """Top-left corner of a node on the canvas"""
    x: float
    y: float

    def to_dict(self) -> Dict[str, float]:
        return {"x": self.x, "y": self.y}


@dataclass
class Node:
    """
    Graph node representing the trigger or one action

    Attributes:
        id: Unique node ID within the graph
        kind: trigger, action or condition
        subtype: Catalog id, empty until the user selects one
        display_name: Display label, defaulted from the catalog entry
        position: Canvas position
        config: Typed config of the subtype
    """
    id: str
    kind: NodeKind
    position: Position
    subtype: str = ""
    display_name: str = ""
    config: NodeConfig = field(default_factory=NodeConfig)

    @property
    def is_trigger(self) -> bool:
        return self.kind == NodeKind.TRIGGER

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "subtype": self.subtype,
            "display_name": self.display_name,
            "position": self.position.to_dict(),
            "config": self.config.as_dict()
        }


@dataclass(frozen=True)
class Connection:
    """
    Directed edge between two nodes, used for rendering and ordering

    Attributes:
        id: Unique connection ID
        source: Source node ID
        target: Target node ID
    """
    id: str
    source: str
    target: str

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target
        }

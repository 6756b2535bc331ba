"""
Workflow graph module.
Node/connection store, gesture mutator, builder, layout and serializer.
"""
from .models import Node, Connection, Position
from .store import WorkflowGraph
from .mutator import GraphMutator
from .builder import GraphBuilder
from .serializer import serialize_graph, order_actions

__all__ = [
    "Node",
    "Connection",
    "Position",
    "WorkflowGraph",
    "GraphMutator",
    "GraphBuilder",
    "serialize_graph",
    "order_actions"
]

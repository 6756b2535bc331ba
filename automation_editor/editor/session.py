"""
Editor Session
State of one open automation editor: graph, selection, drag and save lifecycle
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple, Union

from automation_editor.catalog.catalog import Catalog, get_catalog
from automation_editor.core.constants import EditorState, NotificationVariant
from automation_editor.core.errors import (
    AutomationApiError,
    CannotDeleteTrigger,
    EditorError,
    InvalidEditorState,
    MissingName,
    MissingTrigger
)
from automation_editor.core.logging import get_logger
from automation_editor.graph.builder import GraphBuilder
from automation_editor.graph.layout import connection_paths, drag_offset, dragged_position, stack_layout
from automation_editor.graph.models import Connection, Node
from automation_editor.graph.mutator import GraphMutator
from automation_editor.graph.serializer import order_actions, serialize_graph
from automation_editor.graph.store import WorkflowGraph
from automation_editor.schemas.api_models import AutomationDefinition, AutomationPayload
from automation_editor.services.automation_client import AutomationApiClient
from automation_editor.utils.time import now

logger = get_logger(__name__)

# Errors the user caused and can fix; they get a notification
USER_FACING_ERRORS = (CannotDeleteTrigger, MissingTrigger, MissingName, AutomationApiError)


@dataclass
class Notification:
    """Transient user-facing message"""
    title: str
    description: str
    variant: NotificationVariant = NotificationVariant.DEFAULT

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "variant": self.variant.value
        }


@dataclass
class DragState:
    """Active drag: node and pointer offset from its top-left corner"""
    node_id: str
    offset: Tuple[float, float]


class EditorSession:
    """
    One open automation editor

    Lifecycle:
        CLOSED -> open() -> EDITING -> save() -> SAVING -> CLOSED
                                                   |
                              any failure  <-------+  (back to EDITING)

    Usage:
        session = EditorSession("sess_1", client)
        session.open(is_new=True)
        session.set_details(name="Welcome leads")
        session.update_node("trigger_1", subtype="new_lead")
        session.add_action("send_email")
        await session.save()
    """

    def __init__(
        self,
        session_id: str,
        client: Optional[AutomationApiClient] = None,
        catalog: Optional[Catalog] = None
    ):
        self.session_id = session_id
        self.client = client or AutomationApiClient()
        self.catalog = catalog or get_catalog()

        self.state = EditorState.CLOSED
        self.graph: Optional[WorkflowGraph] = None
        self.mutator: Optional[GraphMutator] = None
        self.automation_id: Optional[Union[int, str]] = None
        self.name = ""
        self.description = ""
        self.selected_node_id: Optional[str] = None
        self.drag: Optional[DragState] = None
        self.notifications: List[Notification] = []
        self.last_active = now()

    # ------------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------------

    def open(self, definition: Optional[AutomationDefinition] = None, is_new: bool = False) -> None:
        """
        Build the graph and start editing

        Args:
            definition: Existing automation to edit
            is_new: Start from the default trigger node

        Raises:
            InvalidEditorState: If the editor is already open
            UnknownSubtype: If the definition uses uncatalogued subtypes
        """
        if self.state != EditorState.CLOSED:
            raise InvalidEditorState(f"Editor {self.session_id} is already open")

        builder = GraphBuilder(self.catalog)
        if definition is not None:
            graph = builder.build_graph(definition)
            # A new automation seeded from a template is created, not updated
            self.automation_id = None if is_new else definition.id
            self.name = definition.name
            self.description = definition.description
        else:
            graph = builder.build_default_graph()
            self.automation_id = None
            self.name = ""
            self.description = ""

        self.graph = graph
        self.mutator = GraphMutator(graph, self.catalog)
        self.selected_node_id = None
        self.drag = None
        self.notifications = []
        self.state = EditorState.EDITING

        logger.info(f"Opened editor {self.session_id} ({'new' if self.automation_id is None else self.automation_id})")

    def close(self) -> None:
        """Discard the graph; closing a closed editor is a no-op"""
        self.graph = None
        self.mutator = None
        self.selected_node_id = None
        self.drag = None
        self.state = EditorState.CLOSED
        logger.info(f"Closed editor {self.session_id}")

    def _require_editing(self) -> GraphMutator:
        if self.state != EditorState.EDITING or self.mutator is None:
            raise InvalidEditorState(
                f"Editor {self.session_id} is {self.state.value}, not editing",
                details={"state": self.state.value}
            )
        return self.mutator

    def notify(
        self,
        title: str,
        description: str,
        variant: NotificationVariant = NotificationVariant.DEFAULT
    ) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self.notifications.append(notification)
        return notification

    def _reject(self, error: EditorError) -> None:
        """Surface a user-facing error as a notification"""
        if isinstance(error, USER_FACING_ERRORS):
            self.notify(error.title, error.description, NotificationVariant.DESTRUCTIVE)
        logger.warning(f"Editor {self.session_id}: {error.message}")

    # ------------------------------------------------------------------------
    # Details
    # ------------------------------------------------------------------------

    def set_details(self, name: Optional[str] = None, description: Optional[str] = None) -> None:
        self._require_editing()
        if name is not None:
            self.name = name
        if description is not None:
            self.description = description

    # ------------------------------------------------------------------------
    # Gestures
    # ------------------------------------------------------------------------

    def add_action(self, subtype: str) -> Node:
        return self._require_editing().add_action(subtype)

    def delete_node(self, node_id: str) -> None:
        """Delete a node; clears the selection if it was selected"""
        mutator = self._require_editing()
        try:
            mutator.delete_node(node_id)
        except EditorError as e:
            self._reject(e)
            raise

        if self.selected_node_id == node_id:
            self.selected_node_id = None
        if self.drag is not None and self.drag.node_id == node_id:
            self.drag = None

    def select(self, node_id: Optional[str]) -> None:
        """Select a single node, or clear the selection with None"""
        mutator = self._require_editing()
        if node_id is not None:
            mutator.graph.get_node(node_id)
        self.selected_node_id = node_id

    @property
    def selected_node(self) -> Optional[Node]:
        if self.graph is None or self.selected_node_id is None:
            return None
        return self.graph.get_node(self.selected_node_id)

    def update_node(
        self,
        node_id: str,
        display_name: Optional[str] = None,
        subtype: Optional[str] = None,
        config: Optional[Dict[str, Any]] = None
    ) -> Node:
        """
        Apply config panel edits

        A name or config sent with a subtype wins over the catalog defaults.
        A rejected edit leaves the node as it was.
        """
        mutator = self._require_editing()
        return mutator.edit_node(node_id, display_name=display_name, subtype=subtype, config=config)

    def move_node(self, node_id: str, x: float, y: float) -> Node:
        return self._require_editing().reposition(node_id, x, y)

    def connect(self, source: str, target: str) -> Connection:
        return self._require_editing().connect(source, target)

    def auto_layout(self) -> Dict[str, Dict[str, float]]:
        """Restack nodes in execution order"""
        mutator = self._require_editing()
        return stack_layout(mutator.graph, order_actions(mutator.graph))

    # ------------------------------------------------------------------------
    # Drag tracking
    # ------------------------------------------------------------------------

    def start_drag(self, node_id: str, pointer_x: float, pointer_y: float) -> None:
        """Begin dragging; pointer is in canvas coordinates"""
        mutator = self._require_editing()
        node = mutator.graph.get_node(node_id)
        self.drag = DragState(
            node_id=node_id,
            offset=drag_offset((pointer_x, pointer_y), node.position)
        )

    def drag_to(self, pointer_x: float, pointer_y: float) -> Optional[Node]:
        """Move the dragged node under the pointer; no-op when not dragging"""
        if self.drag is None or self.state != EditorState.EDITING:
            return None
        position = dragged_position((pointer_x, pointer_y), self.drag.offset)
        return self.mutator.reposition(self.drag.node_id, position.x, position.y)

    def end_drag(self) -> None:
        self.drag = None

    # ------------------------------------------------------------------------
    # Save
    # ------------------------------------------------------------------------

    def preview(self) -> AutomationPayload:
        """
        Serialize without saving

        Raises:
            MissingTrigger: If no trigger type is selected
            MissingName: If the automation name is empty
        """
        mutator = self._require_editing()
        try:
            return serialize_graph(mutator.graph, self.name, self.description)
        except EditorError as e:
            self._reject(e)
            raise

    async def save(self) -> Dict[str, Any]:
        """
        Validate, serialize and hand the automation to the persistence API

        On success the editor closes. On any failure it returns to EDITING
        with the graph untouched so the user can retry.

        Returns:
            Dictionary with the payload sent and the API result

        Raises:
            MissingTrigger, MissingName: Validation failed, nothing was sent
            AutomationApiError: The persistence API call failed
        """
        payload = self.preview()

        self.state = EditorState.SAVING
        logger.info(f"Saving editor {self.session_id}: '{payload.name}'")

        try:
            result = await self.client.save_automation(payload, self.automation_id)
        except AutomationApiError as e:
            self.state = EditorState.EDITING
            self._reject(e)
            raise
        except BaseException:
            # Unexpected failure or cancellation; the graph stays editable
            self.state = EditorState.EDITING
            logger.error(f"Save of editor {self.session_id} aborted; back to editing")
            raise

        self.notify("Workflow saved", "Your workflow has been saved successfully.")
        self.close()

        return {"payload": payload.to_payload(), "result": result}

    # ------------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------------

    def snapshot(self) -> Dict[str, Any]:
        """JSON-ready view of the session"""
        graph = self.graph
        return {
            "session_id": self.session_id,
            "state": self.state.value,
            "automation_id": self.automation_id,
            "name": self.name,
            "description": self.description,
            "selected_node_id": self.selected_node_id,
            "nodes": [node.to_dict() for node in graph.nodes] if graph else [],
            "connections": [c.to_dict() for c in graph.connections] if graph else [],
            "paths": connection_paths(graph) if graph else [],
            "notifications": [n.to_dict() for n in self.notifications]
        }

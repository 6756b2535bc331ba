"""
Tests for the editor session lifecycle.

Covers:
- open / close state transitions
- selection and drag tracking
- notifications for user-facing errors
- save against a mock persistence API
"""
import httpx
import pytest

from automation_editor.catalog.configs import SendEmailConfig
from automation_editor.core.constants import EditorState
from automation_editor.core.errors import (
    AutomationApiError,
    CannotDeleteTrigger,
    InvalidConfig,
    InvalidEditorState,
    MissingName,
    MissingTrigger,
    NotFound,
    UnknownSubtype
)
from automation_editor.editor.session import EditorSession
from automation_editor.graph.models import Position
from automation_editor.schemas.api_models import AutomationDefinition
from automation_editor.services.automation_client import AutomationApiClient


@pytest.fixture
def session(make_client, catalog):
    """Session opened on a new automation."""
    session = EditorSession("sess_test", make_client(), catalog)
    session.open(is_new=True)
    return session


@pytest.fixture
def stored_definition():
    return AutomationDefinition.model_validate({
        "id": 42,
        "name": "Post-sale follow up",
        "description": "Runs after a deal closes",
        "triggerType": "deal_closed",
        "actions": [{"id": "wait", "config": {"days": "3"}}]
    })


class TestLifecycle:
    """Open, close and state guards."""

    def test_open_new(self, session):
        assert session.state == EditorState.EDITING
        assert session.automation_id is None
        assert session.name == ""
        assert [n.id for n in session.graph.nodes] == ["trigger_1"]

    def test_open_existing(self, make_client, catalog, stored_definition):
        session = EditorSession("sess_1", make_client(), catalog)
        session.open(stored_definition)

        assert session.automation_id == 42
        assert session.name == "Post-sale follow up"
        assert session.description == "Runs after a deal closes"
        assert session.graph.trigger_node().subtype == "deal_closed"

    def test_open_definition_as_new_creates_instead_of_updates(self, make_client, catalog, stored_definition):
        session = EditorSession("sess_1", make_client(), catalog)
        session.open(stored_definition, is_new=True)

        assert session.automation_id is None
        assert len(session.graph.action_nodes()) == 1

    def test_open_twice_is_rejected(self, session):
        with pytest.raises(InvalidEditorState):
            session.open(is_new=True)

    def test_close_discards_graph(self, session):
        session.add_action("send_email")
        session.close()

        assert session.state == EditorState.CLOSED
        assert session.graph is None

        # closing again is harmless
        session.close()
        assert session.state == EditorState.CLOSED

    def test_gestures_require_editing(self, make_client, catalog):
        session = EditorSession("sess_1", make_client(), catalog)

        with pytest.raises(InvalidEditorState):
            session.add_action("send_email")

        with pytest.raises(InvalidEditorState):
            session.preview()

    def test_reopen_starts_clean(self, session):
        session.notify("Note", "Something")
        session.close()
        session.open(is_new=True)

        assert session.notifications == []
        assert session.selected_node_id is None


class TestSelection:
    """Single-node selection."""

    def test_select_and_clear(self, session):
        session.select("trigger_1")
        assert session.selected_node.id == "trigger_1"

        session.select(None)
        assert session.selected_node is None

    def test_select_unknown_node(self, session):
        with pytest.raises(NotFound):
            session.select("action_9")

    def test_deleting_selected_node_clears_selection(self, session):
        node = session.add_action("send_email")
        session.select(node.id)

        session.delete_node(node.id)

        assert session.selected_node_id is None

    def test_deleting_other_node_keeps_selection(self, session):
        first = session.add_action("send_email")
        second = session.add_action("wait")
        session.select(first.id)

        session.delete_node(second.id)

        assert session.selected_node_id == first.id

    def test_update_node_applies_subtype_name_and_config(self, session):
        node = session.update_node("trigger_1", subtype="lead_stage_change", display_name="Qualified", config={"stage": "qualified"})

        assert node.subtype == "lead_stage_change"
        assert node.display_name == "Qualified"
        assert node.config.as_dict() == {"stage": "qualified"}

    def test_rejected_edit_leaves_node_unchanged(self, session):
        node = session.add_action("send_email")
        session.update_node(node.id, config={"template": "welcome"})

        with pytest.raises(InvalidConfig):
            session.update_node(node.id, subtype="wait", display_name="Pause", config={"days": {"a": 1}})

        assert node.subtype == "send_email"
        assert node.display_name == "Send Email"
        assert isinstance(node.config, SendEmailConfig)
        assert node.config.as_dict() == {"template": "welcome"}

    def test_rejected_subtype_leaves_name_unchanged(self, session):
        with pytest.raises(UnknownSubtype):
            session.update_node("trigger_1", subtype="webhook_received", display_name="Hook")

        assert session.graph.trigger_node().display_name == "Select a Trigger"


class TestDrag:
    """Drag start, move and end."""

    def test_drag_keeps_pointer_offset(self, session):
        node = session.add_action("send_email")

        session.start_drag(node.id, 130, 270)
        session.drag_to(530, 670)
        session.end_drag()

        assert node.position == Position(x=500, y=650)
        assert session.drag is None

    def test_move_without_drag_is_ignored(self, session):
        node = session.add_action("send_email")

        assert session.drag_to(900, 900) is None
        assert node.position == Position(x=100, y=250)

    def test_drag_does_not_rewire(self, session):
        node = session.add_action("send_email")
        before = [c.to_dict() for c in session.graph.connections]

        session.start_drag("trigger_1", 110, 110)
        session.drag_to(410, 810)
        session.end_drag()

        assert [c.to_dict() for c in session.graph.connections] == before
        assert node.position == Position(x=100, y=250)

    def test_deleting_dragged_node_ends_drag(self, session):
        node = session.add_action("send_email")
        session.start_drag(node.id, 100, 250)

        session.delete_node(node.id)

        assert session.drag is None


class TestNotifications:
    """User-facing errors become destructive notifications."""

    def test_delete_trigger_notifies(self, session):
        with pytest.raises(CannotDeleteTrigger):
            session.delete_node("trigger_1")

        assert session.notifications[-1].to_dict() == {
            "title": "Cannot delete trigger",
            "description": "The trigger node is required for the workflow.",
            "variant": "destructive"
        }
        assert session.graph.has_node("trigger_1")

    def test_missing_trigger_notifies(self, session):
        session.set_details(name="Welcome")

        with pytest.raises(MissingTrigger):
            session.preview()

        assert session.notifications[-1].title == "Trigger required"

    def test_missing_name_notifies(self, session):
        session.update_node("trigger_1", subtype="new_lead")

        with pytest.raises(MissingName):
            session.preview()

        assert session.notifications[-1].title == "Workflow name required"

    def test_programming_errors_do_not_notify(self, session):
        with pytest.raises(NotFound):
            session.delete_node("action_7")

        assert session.notifications == []


class TestSave:
    """Saving through the persistence API."""

    @pytest.mark.asyncio
    async def test_save_new_automation(self, session, api_calls):
        session.set_details(name="Welcome leads", description="Greets new leads")
        session.update_node("trigger_1", subtype="new_lead")
        email = session.add_action("send_email")
        session.update_node(email.id, config={"template": "welcome"})

        outcome = await session.save()

        assert api_calls == [{
            "method": "POST",
            "path": "/api/workflows",
            "json": {
                "name": "Welcome leads",
                "description": "Greets new leads",
                "isActive": True,
                "triggerType": "new_lead",
                "triggerConfig": {},
                "actions": [{"id": "send_email", "name": "Send Email", "config": {"template": "welcome"}}]
            },
            "authorization": "Bearer test-token"
        }]
        assert outcome["result"] == {"id": 1}
        assert outcome["payload"] == api_calls[0]["json"]
        assert session.state == EditorState.CLOSED
        assert session.notifications[-1].title == "Workflow saved"

    @pytest.mark.asyncio
    async def test_save_existing_automation_uses_put(self, make_client, catalog, api_calls, stored_definition):
        session = EditorSession("sess_1", make_client(status_code=200), catalog)
        session.open(stored_definition)

        await session.save()

        assert api_calls[0]["method"] == "PUT"
        assert api_calls[0]["path"] == "/api/workflows/42"
        assert api_calls[0]["json"]["actions"] == [{"id": "wait", "name": "Wait/Delay", "config": {"days": "3"}}]

    @pytest.mark.asyncio
    async def test_validation_failure_sends_nothing(self, session, api_calls):
        session.update_node("trigger_1", subtype="new_lead")

        with pytest.raises(MissingName):
            await session.save()

        assert api_calls == []
        assert session.state == EditorState.EDITING

    @pytest.mark.asyncio
    async def test_api_failure_keeps_editing(self, make_client, catalog, api_calls):
        session = EditorSession("sess_1", make_client(status_code=500, body={"error": "db down"}), catalog)
        session.open(is_new=True)
        session.set_details(name="Welcome leads")
        session.update_node("trigger_1", subtype="new_lead")
        session.add_action("send_email")

        with pytest.raises(AutomationApiError) as excinfo:
            await session.save()

        assert excinfo.value.status_code == 500
        assert session.state == EditorState.EDITING
        assert len(session.graph.action_nodes()) == 1
        assert session.notifications[-1].variant.value == "destructive"
        assert session.notifications[-1].title == "Failed to save workflow"

        # still editable, and a retry sends the same payload again
        with pytest.raises(AutomationApiError):
            await session.save()
        assert len(api_calls) == 2
        assert api_calls[0]["json"] == api_calls[1]["json"]

    @pytest.mark.asyncio
    async def test_unexpected_failure_returns_to_editing(self, catalog):
        def handler(request: httpx.Request) -> httpx.Response:
            raise RuntimeError("connection pool exploded")

        client = AutomationApiClient(
            base_url="http://automation-api.test",
            transport=httpx.MockTransport(handler)
        )
        session = EditorSession("sess_1", client, catalog)
        session.open(is_new=True)
        session.set_details(name="Welcome leads")
        session.update_node("trigger_1", subtype="new_lead")

        with pytest.raises(RuntimeError):
            await session.save()

        assert session.state == EditorState.EDITING
        # gestures and a retry are accepted again
        session.add_action("send_email")
        with pytest.raises(RuntimeError):
            await session.save()
        assert session.state == EditorState.EDITING


class TestSnapshot:

    def test_snapshot_renders_graph(self, session):
        session.add_action("send_email")

        snapshot = session.snapshot()

        assert snapshot["state"] == "editing"
        assert [n["id"] for n in snapshot["nodes"]] == ["trigger_1", "action_1"]
        assert snapshot["connections"] == [
            {"id": "conn_trigger_1_action_1", "source": "trigger_1", "target": "action_1"}
        ]
        assert snapshot["paths"] == [{"id": "conn_trigger_1_action_1", "path": "M220,140 L220,250"}]

    def test_closed_snapshot_is_empty(self, session):
        session.close()

        snapshot = session.snapshot()

        assert snapshot["state"] == "closed"
        assert snapshot["nodes"] == []
        assert snapshot["paths"] == []

"""
Tests for seeding the editor graph from stored automations.
"""
import pytest

from automation_editor.catalog.configs import DealClosedTriggerConfig, NodeConfig, WaitConfig
from automation_editor.core.errors import UnknownSubtype
from automation_editor.graph.builder import GraphBuilder
from automation_editor.graph.models import Position
from automation_editor.schemas.api_models import AutomationDefinition


@pytest.fixture
def builder(catalog):
    return GraphBuilder(catalog)


def _definition(**data) -> AutomationDefinition:
    return AutomationDefinition.model_validate(data)


class TestDefaultGraph:
    """Graph of a brand new automation."""

    def test_only_unset_trigger(self, builder):
        graph = builder.build_default_graph()

        assert len(graph.nodes) == 1
        assert graph.connections == []

        trigger = graph.trigger_node()
        assert trigger.id == "trigger_1"
        assert trigger.subtype == ""
        assert trigger.display_name == "Select a Trigger"
        assert trigger.position == Position(x=100, y=100)
        assert type(trigger.config) is NodeConfig

    def test_definition_without_trigger_type_starts_empty(self, builder):
        graph = builder.build_graph(_definition(name="Draft", actions=[{"id": "send_email"}]))

        assert graph.trigger_node().subtype == ""
        assert [(c.source, c.target) for c in graph.connections] == [("trigger_1", "action_1")]


class TestBuildGraph:
    """Graph built from an existing automation."""

    def test_stored_form(self, builder):
        graph = builder.build_graph(_definition(
            id=12,
            name="Post-sale follow up",
            triggerType="deal_closed",
            triggerConfig={"outcome": "won"},
            actions=[
                {"id": "send_email", "name": "Thank you", "config": {"template": "thanks"}},
                {"id": "wait", "config": {"days": "3"}},
                {"id": "create_task", "config": None}
            ]
        ))

        trigger = graph.trigger_node()
        assert trigger.subtype == "deal_closed"
        assert trigger.display_name == "Deal Closed (Won/Lost)"
        assert isinstance(trigger.config, DealClosedTriggerConfig)
        assert trigger.config.outcome == "won"

        actions = graph.action_nodes()
        assert [n.id for n in actions] == ["action_1", "action_2", "action_3"]
        assert [n.subtype for n in actions] == ["send_email", "wait", "create_task"]
        assert [n.display_name for n in actions] == ["Thank you", "Wait/Delay", "Create Task"]
        assert [n.position.y for n in actions] == [250, 400, 550]
        assert all(n.position.x == 100 for n in actions)

        assert isinstance(actions[1].config, WaitConfig)
        assert actions[1].config.days == "3"
        assert actions[2].config.as_dict() == {}

    def test_actions_are_chained_from_trigger(self, builder):
        graph = builder.build_graph(_definition(
            triggerType="new_lead",
            actions=[{"id": "send_email"}, {"id": "wait"}]
        ))

        assert [(c.source, c.target) for c in graph.connections] == [
            ("trigger_1", "action_1"),
            ("action_1", "action_2")
        ]

    def test_template_form_trigger_wins(self, builder):
        definition = _definition(
            name="From template",
            triggerType="new_lead",
            trigger={"id": "task_completed"},
            actions=[{"actionType": "send_notification", "config": {"message": "Done"}}]
        )

        graph = builder.build_graph(definition)

        assert definition.resolved_trigger_type == "task_completed"
        assert graph.trigger_node().subtype == "task_completed"
        assert graph.action_nodes()[0].subtype == "send_notification"
        assert graph.action_nodes()[0].config.as_dict() == {"message": "Done"}

    def test_unknown_trigger_type_fails(self, builder):
        with pytest.raises(UnknownSubtype) as excinfo:
            builder.build_graph(_definition(triggerType="webhook_received"))

        assert excinfo.value.details == {"subtype": "webhook_received", "kind": "trigger"}

    def test_unknown_action_type_fails(self, builder):
        with pytest.raises(UnknownSubtype):
            builder.build_graph(_definition(
                triggerType="new_lead",
                actions=[{"id": "send_email"}, {"id": "send_fax"}]
            ))

    def test_built_graph_keeps_single_trigger(self, builder):
        graph = builder.build_graph(_definition(
            triggerType="scheduled",
            triggerConfig={"frequency": "daily", "time": "09:00"},
            actions=[{"id": "update_record", "config": {"field": "status", "value": "stale"}}]
        ))

        assert [n.id for n in graph.nodes if n.is_trigger] == ["trigger_1"]
        assert graph.trigger_node().config.as_dict() == {"frequency": "daily", "time": "09:00"}

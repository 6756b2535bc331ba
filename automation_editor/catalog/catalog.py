"""
Trigger and Action Catalog
Static reference data for the subtypes a node can take
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from automation_editor.catalog.configs import (
    NodeConfig,
    ConfigModel,
    StageChangeTriggerConfig,
    DealClosedTriggerConfig,
    ScheduledTriggerConfig,
    SendEmailConfig,
    CreateTaskConfig,
    UpdateRecordConfig,
    SendNotificationConfig,
    CreateEventConfig,
    WaitConfig,
    ConditionConfig
)
from automation_editor.core.constants import NodeKind
from automation_editor.core.errors import InvalidConfig, UnknownSubtype


@dataclass(frozen=True)
class CatalogEntry:
    """
    One trigger or action subtype

    Attributes:
        id: Subtype id stored on nodes and in the saved definition
        name: Default display name of nodes of this subtype
        category: Grouping shown in the palette
        description: Help text shown in the config panel
        config_model: Typed config model for nodes of this subtype
    """
    id: str
    name: str
    category: str
    description: str
    config_model: ConfigModel = NodeConfig

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "config_fields": [
                field.alias or name
                for name, field in self.config_model.model_fields.items()
            ]
        }


# ============================================================================
# CATALOG DATA
# ============================================================================

TRIGGER_TYPES: List[CatalogEntry] = [
    CatalogEntry(
        id="new_lead",
        name="New Lead Created",
        category="Leads",
        description="Trigger when a new lead is created in the system"
    ),
    CatalogEntry(
        id="lead_stage_change",
        name="Lead Stage Changed",
        category="Leads",
        description="Trigger when a lead's stage is changed",
        config_model=StageChangeTriggerConfig
    ),
    CatalogEntry(
        id="deal_stage_change",
        name="Deal Stage Changed",
        category="Opportunities",
        description="Trigger when a deal moves to a different stage",
        config_model=StageChangeTriggerConfig
    ),
    CatalogEntry(
        id="deal_closed",
        name="Deal Closed (Won/Lost)",
        category="Opportunities",
        description="Trigger when a deal is marked as won or lost",
        config_model=DealClosedTriggerConfig
    ),
    CatalogEntry(
        id="task_completed",
        name="Task Completed",
        category="Tasks",
        description="Trigger when a task is marked as completed"
    ),
    CatalogEntry(
        id="meeting_scheduled",
        name="Meeting Scheduled",
        category="Events",
        description="Trigger when a new meeting is scheduled"
    ),
    CatalogEntry(
        id="scheduled",
        name="Scheduled (Time-based)",
        category="System",
        description="Trigger at specific times or intervals",
        config_model=ScheduledTriggerConfig
    ),
]

ACTION_TYPES: List[CatalogEntry] = [
    CatalogEntry(
        id="send_email",
        name="Send Email",
        category="Communication",
        description="Send an automated email to contacts",
        config_model=SendEmailConfig
    ),
    CatalogEntry(
        id="create_task",
        name="Create Task",
        category="Tasks",
        description="Create a task assigned to a team member",
        config_model=CreateTaskConfig
    ),
    CatalogEntry(
        id="update_record",
        name="Update Record",
        category="Data",
        description="Update a field value on a record",
        config_model=UpdateRecordConfig
    ),
    CatalogEntry(
        id="send_notification",
        name="Send Notification",
        category="Communication",
        description="Send an in-app notification to users",
        config_model=SendNotificationConfig
    ),
    CatalogEntry(
        id="create_event",
        name="Create Calendar Event",
        category="Events",
        description="Schedule a calendar event",
        config_model=CreateEventConfig
    ),
    CatalogEntry(
        id="wait",
        name="Wait/Delay",
        category="Flow Control",
        description="Wait for a specific time period before continuing",
        config_model=WaitConfig
    ),
    CatalogEntry(
        id="condition",
        name="Condition/Branch",
        category="Flow Control",
        description="Create a conditional branch in the workflow",
        config_model=ConditionConfig
    ),
]


# ============================================================================
# CATALOG
# ============================================================================

class Catalog:
    """
    Read-only lookup over the trigger and action catalogs

    Usage:
        catalog = get_catalog()
        entry = catalog.get(NodeKind.ACTION, "send_email")
        config = catalog.build_config(NodeKind.ACTION, "wait", {"days": "3"})
    """

    def __init__(
        self,
        triggers: List[CatalogEntry],
        actions: List[CatalogEntry]
    ):
        self._triggers = {entry.id: entry for entry in triggers}
        self._actions = {entry.id: entry for entry in actions}

    @property
    def triggers(self) -> List[CatalogEntry]:
        return list(self._triggers.values())

    @property
    def actions(self) -> List[CatalogEntry]:
        return list(self._actions.values())

    def _entries_for(self, kind: NodeKind) -> Dict[str, CatalogEntry]:
        # Condition nodes pick their subtype from the action catalog
        if kind == NodeKind.TRIGGER:
            return self._triggers
        return self._actions

    def find(self, kind: NodeKind, subtype: str) -> Optional[CatalogEntry]:
        """Get catalog entry or None"""
        return self._entries_for(kind).get(subtype)

    def get(self, kind: NodeKind, subtype: str) -> CatalogEntry:
        """
        Get catalog entry

        Raises:
            UnknownSubtype: If the subtype is not catalogued for this kind
        """
        entry = self.find(kind, subtype)
        if entry is None:
            raise UnknownSubtype(subtype, kind.value)
        return entry

    def config_model_for(self, kind: NodeKind, subtype: Optional[str]) -> ConfigModel:
        """Config model for a subtype, untyped for unset or unknown subtypes"""
        entry = self.find(kind, subtype) if subtype else None
        return entry.config_model if entry else NodeConfig

    def build_config(
        self,
        kind: NodeKind,
        subtype: Optional[str],
        data: Optional[Dict[str, Any]] = None
    ) -> NodeConfig:
        """
        Validate raw config data into the subtype's config model

        Raises:
            InvalidConfig: If the data does not fit the model
        """
        model = self.config_model_for(kind, subtype)
        try:
            return model.model_validate(model.normalize_keys(data or {}))
        except PydanticValidationError as e:
            raise InvalidConfig(
                f"Invalid config for {kind.value} type '{subtype}': {e.error_count()} errors",
                details={"subtype": subtype, "errors": [err["msg"] for err in e.errors()]}
            )


_catalog: Optional[Catalog] = None


def get_catalog() -> Catalog:
    """
    Get singleton catalog instance

    Returns:
        Catalog over TRIGGER_TYPES and ACTION_TYPES
    """
    global _catalog

    if _catalog is None:
        _catalog = Catalog(TRIGGER_TYPES, ACTION_TYPES)

    return _catalog

"""
Node Config Models
One typed config model per catalog subtype, keyed by subtype id
"""
from typing import Any, Dict, Optional, Type, Union
from pydantic import BaseModel, ConfigDict, Field


class NodeConfig(BaseModel):
    """
    Base config model

    Unknown keys are kept so a definition loaded from the persistence API
    is saved back without losing fields this editor does not know about.
    Doubles as the untyped fallback for subtypes absent from the catalog.
    """
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    def as_dict(self) -> Dict[str, Any]:
        """Wire form: camelCase keys, fields never set omitted, explicit nulls kept"""
        return self.model_dump(by_alias=True, exclude_unset=True)

    def merged(self, updates: Dict[str, Any]) -> "NodeConfig":
        """Return a new config of the same type with `updates` merged in"""
        return type(self).model_validate({**self.as_dict(), **self.normalize_keys(updates)})

    @classmethod
    def normalize_keys(cls, data: Dict[str, Any]) -> Dict[str, Any]:
        """Map python field names to their wire aliases"""
        aliases = {
            name: field.alias
            for name, field in cls.model_fields.items()
            if field.alias
        }
        return {aliases.get(key, key): value for key, value in data.items()}


# ============================================================================
# TRIGGER CONFIGS
# ============================================================================

class StageChangeTriggerConfig(NodeConfig):
    """Fires when a lead or deal enters `stage` (any stage when unset)"""
    stage: Optional[str] = None


class DealClosedTriggerConfig(NodeConfig):
    outcome: Optional[str] = Field(default=None, description="won, lost or unset for both")


class ScheduledTriggerConfig(NodeConfig):
    frequency: Optional[str] = Field(default=None, description="daily, weekly, monthly")
    time: Optional[str] = Field(default=None, description="HH:MM")


# ============================================================================
# ACTION CONFIGS
# ============================================================================

class SendEmailConfig(NodeConfig):
    template: Optional[str] = None


class CreateTaskConfig(NodeConfig):
    assign_to: Optional[str] = Field(default=None, alias="assignTo")
    task_name: Optional[str] = Field(default=None, alias="taskName")


class UpdateRecordConfig(NodeConfig):
    field: Optional[str] = None
    value: Optional[Any] = None


class SendNotificationConfig(NodeConfig):
    message: Optional[str] = None
    recipient: Optional[str] = None


class CreateEventConfig(NodeConfig):
    title: Optional[str] = None
    duration: Optional[Union[int, str]] = None


class WaitConfig(NodeConfig):
    # The editor form sends days as a string
    days: Optional[Union[int, str]] = None


class ConditionConfig(NodeConfig):
    field: Optional[str] = None
    operator: Optional[str] = None
    value: Optional[Any] = None


ConfigModel = Type[NodeConfig]

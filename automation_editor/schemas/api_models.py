"""
API Request/Response Models for the Automation Editor
"""
from typing import Any, Dict, List, Literal, Optional, Union
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


# ============================================================================
# AUTOMATION DEFINITION (persistence API boundary)
# ============================================================================

class TriggerRef(BaseModel):
    """Template-style trigger reference: {"trigger": {"id": "new_lead"}}"""
    model_config = ConfigDict(extra="allow")

    id: str


class ActionDefinition(BaseModel):
    """One action of an existing automation, as stored by the persistence API"""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("id", "actionType"), description="Action subtype")
    name: Optional[str] = None
    config: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("config", mode="before")
    @classmethod
    def default_config(cls, v: Any) -> Any:
        return v if v is not None else {}


class AutomationDefinition(BaseModel):
    """
    Existing automation used to seed the editor

    Accepts both the stored form (triggerType) and the template form
    (trigger.id); when both are present trigger.id wins.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[Union[int, str]] = Field(default=None, description="Persistence API id of the automation")
    name: str = ""
    description: str = ""
    is_active: bool = Field(default=True, alias="isActive")
    trigger_type: Optional[str] = Field(default=None, alias="triggerType")
    trigger: Optional[TriggerRef] = None
    trigger_config: Dict[str, Any] = Field(default_factory=dict, alias="triggerConfig")
    actions: List[ActionDefinition] = Field(default_factory=list)

    @field_validator("name", "description", mode="before")
    @classmethod
    def default_text(cls, v: Any) -> Any:
        return v if v is not None else ""

    @field_validator("trigger_config", mode="before")
    @classmethod
    def default_trigger_config(cls, v: Any) -> Any:
        return v if v is not None else {}

    @property
    def resolved_trigger_type(self) -> Optional[str]:
        if self.trigger and self.trigger.id:
            return self.trigger.id
        return self.trigger_type or None


class ActionPayload(BaseModel):
    """One flattened action in the saved definition"""
    id: str = Field(..., description="Action subtype")
    name: str
    config: Dict[str, Any] = Field(default_factory=dict)


class AutomationPayload(BaseModel):
    """Linear automation definition handed to the persistence API"""
    model_config = ConfigDict(populate_by_name=True)

    name: str
    description: str = ""
    is_active: bool = Field(default=True, alias="isActive")
    trigger_type: str = Field(..., alias="triggerType")
    trigger_config: Dict[str, Any] = Field(default_factory=dict, alias="triggerConfig")
    actions: List[ActionPayload] = Field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        """JSON body for the persistence API"""
        return self.model_dump(by_alias=True)


# ============================================================================
# CATALOG DTOs
# ============================================================================

class CatalogEntryResponse(BaseModel):
    """Catalog entry as shown in the palette"""
    id: str
    name: str
    category: str
    description: str
    config_fields: List[str] = Field(default_factory=list)


# ============================================================================
# EDITOR SESSION DTOs
# ============================================================================

class OpenEditorRequest(BaseModel):
    """Request to open an editor on an existing automation or a new one"""
    workflow: Optional[AutomationDefinition] = None
    is_new: bool = False


class UpdateDetailsRequest(BaseModel):
    """Automation name/description edits"""
    name: Optional[str] = None
    description: Optional[str] = None


class AddActionRequest(BaseModel):
    """Add an action from the palette"""
    subtype: str = Field(..., description="Action catalog id")


class UpdateNodeRequest(BaseModel):
    """Config panel edits for one node"""
    display_name: Optional[str] = None
    subtype: Optional[str] = None
    config: Optional[Dict[str, Any]] = None


class MoveNodeRequest(BaseModel):
    """New canvas position of a node"""
    x: float
    y: float


class SelectNodeRequest(BaseModel):
    """Select a node, or clear the selection with null"""
    node_id: Optional[str] = None


class ConnectNodesRequest(BaseModel):
    """Manual connection source -> target"""
    source: str
    target: str


class NotificationResponse(BaseModel):
    """User-facing notification"""
    title: str
    description: str
    variant: Literal["default", "destructive"] = "default"


class EditorSnapshot(BaseModel):
    """Full view of an editor session for rendering"""
    session_id: str
    state: Literal["closed", "editing", "saving"]
    automation_id: Optional[Union[int, str]] = None
    name: str = ""
    description: str = ""
    selected_node_id: Optional[str] = None
    nodes: List[Dict[str, Any]] = Field(default_factory=list)
    connections: List[Dict[str, Any]] = Field(default_factory=list)
    paths: List[Dict[str, Any]] = Field(default_factory=list)
    notifications: List[NotificationResponse] = Field(default_factory=list)


class LayoutResponse(BaseModel):
    """Positions after auto-arrange"""
    positions: Dict[str, Dict[str, float]]


class SaveEditorResponse(BaseModel):
    """Outcome of a successful save"""
    saved: bool
    payload: Dict[str, Any]
    result: Dict[str, Any] = Field(default_factory=dict)

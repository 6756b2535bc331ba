"""
Editor API Routes
Gesture endpoints driving an open automation editor session

Editor errors propagate to the exception handler registered in main.py.
"""
from fastapi import APIRouter, Depends, status

from automation_editor.editor.session import EditorSession
from automation_editor.schemas.api_models import (
    AddActionRequest,
    ConnectNodesRequest,
    EditorSnapshot,
    LayoutResponse,
    MoveNodeRequest,
    OpenEditorRequest,
    SaveEditorResponse,
    SelectNodeRequest,
    UpdateDetailsRequest,
    UpdateNodeRequest
)
from automation_editor.services.editor_service import EditorService, get_editor_service

router = APIRouter(prefix="/editor/sessions", tags=["Editor"])


def _snapshot(session: EditorSession) -> EditorSnapshot:
    return EditorSnapshot(**session.snapshot())


@router.post("", response_model=EditorSnapshot, status_code=status.HTTP_201_CREATED)
async def open_editor(
    request: OpenEditorRequest,
    service: EditorService = Depends(get_editor_service)
) -> EditorSnapshot:
    """
    Open an editor on an existing automation, or on a new one
    """
    session = service.open_session(request.workflow, is_new=request.is_new)
    return _snapshot(session)


@router.get("/{session_id}", response_model=EditorSnapshot)
async def get_editor(
    session_id: str,
    service: EditorService = Depends(get_editor_service)
) -> EditorSnapshot:
    return _snapshot(service.get_session(session_id))


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def close_editor(
    session_id: str,
    service: EditorService = Depends(get_editor_service)
) -> None:
    """Close the editor and discard its graph"""
    service.close_session(session_id)


@router.patch("/{session_id}/details", response_model=EditorSnapshot)
async def update_details(
    session_id: str,
    request: UpdateDetailsRequest,
    service: EditorService = Depends(get_editor_service)
) -> EditorSnapshot:
    session = service.get_session(session_id)
    session.set_details(name=request.name, description=request.description)
    return _snapshot(session)


@router.post("/{session_id}/actions", response_model=EditorSnapshot, status_code=status.HTTP_201_CREATED)
async def add_action(
    session_id: str,
    request: AddActionRequest,
    service: EditorService = Depends(get_editor_service)
) -> EditorSnapshot:
    """
    Add an action from the palette at the end of the chain
    """
    session = service.get_session(session_id)
    session.add_action(request.subtype)
    return _snapshot(session)


@router.patch("/{session_id}/nodes/{node_id}", response_model=EditorSnapshot)
async def update_node(
    session_id: str,
    node_id: str,
    request: UpdateNodeRequest,
    service: EditorService = Depends(get_editor_service)
) -> EditorSnapshot:
    """
    Apply config panel edits (type, name, config values)
    """
    session = service.get_session(session_id)
    session.update_node(
        node_id,
        display_name=request.display_name,
        subtype=request.subtype,
        config=request.config
    )
    return _snapshot(session)


@router.post("/{session_id}/nodes/{node_id}/position", response_model=EditorSnapshot)
async def move_node(
    session_id: str,
    node_id: str,
    request: MoveNodeRequest,
    service: EditorService = Depends(get_editor_service)
) -> EditorSnapshot:
    """
    Move a node (cosmetic, connections are unchanged)
    """
    session = service.get_session(session_id)
    session.move_node(node_id, request.x, request.y)
    return _snapshot(session)


@router.delete("/{session_id}/nodes/{node_id}", response_model=EditorSnapshot)
async def delete_node(
    session_id: str,
    node_id: str,
    service: EditorService = Depends(get_editor_service)
) -> EditorSnapshot:
    session = service.get_session(session_id)
    session.delete_node(node_id)
    return _snapshot(session)


@router.post("/{session_id}/selection", response_model=EditorSnapshot)
async def select_node(
    session_id: str,
    request: SelectNodeRequest,
    service: EditorService = Depends(get_editor_service)
) -> EditorSnapshot:
    session = service.get_session(session_id)
    session.select(request.node_id)
    return _snapshot(session)


@router.post("/{session_id}/connections", response_model=EditorSnapshot, status_code=status.HTTP_201_CREATED)
async def connect_nodes(
    session_id: str,
    request: ConnectNodesRequest,
    service: EditorService = Depends(get_editor_service)
) -> EditorSnapshot:
    session = service.get_session(session_id)
    session.connect(request.source, request.target)
    return _snapshot(session)


@router.post("/{session_id}/layout", response_model=LayoutResponse)
async def auto_layout(
    session_id: str,
    service: EditorService = Depends(get_editor_service)
) -> LayoutResponse:
    """
    Restack nodes top-down in execution order
    """
    session = service.get_session(session_id)
    return LayoutResponse(positions=session.auto_layout())


@router.get("/{session_id}/preview")
async def preview_automation(
    session_id: str,
    service: EditorService = Depends(get_editor_service)
):
    """
    Serialized automation as it would be saved
    """
    session = service.get_session(session_id)
    return session.preview().to_payload()


@router.post("/{session_id}/save", response_model=SaveEditorResponse)
async def save_automation(
    session_id: str,
    service: EditorService = Depends(get_editor_service)
) -> SaveEditorResponse:
    """
    Save the automation through the persistence API

    The session is closed on success and kept open on failure.
    """
    session = service.get_session(session_id)
    outcome = await session.save()
    service.forget_session(session_id)

    return SaveEditorResponse(saved=True, payload=outcome["payload"], result=outcome["result"])

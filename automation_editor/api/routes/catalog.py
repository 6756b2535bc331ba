"""
Catalog API Routes
Trigger and action palettes
"""
from typing import List

from fastapi import APIRouter

from automation_editor.catalog.catalog import get_catalog
from automation_editor.schemas.api_models import CatalogEntryResponse

router = APIRouter(prefix="/catalog", tags=["Catalog"])


@router.get("/triggers", response_model=List[CatalogEntryResponse])
async def list_triggers() -> List[CatalogEntryResponse]:
    """Trigger types the automation can start from"""
    return [CatalogEntryResponse(**entry.to_dict()) for entry in get_catalog().triggers]


@router.get("/actions", response_model=List[CatalogEntryResponse])
async def list_actions() -> List[CatalogEntryResponse]:
    """Action types available in the palette"""
    return [CatalogEntryResponse(**entry.to_dict()) for entry in get_catalog().actions]

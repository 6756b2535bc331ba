"""
Catalog module.
Static trigger/action subtypes and their typed config models.
"""
from .catalog import Catalog, CatalogEntry, TRIGGER_TYPES, ACTION_TYPES, get_catalog
from .configs import NodeConfig

__all__ = [
    "Catalog",
    "CatalogEntry",
    "TRIGGER_TYPES",
    "ACTION_TYPES",
    "get_catalog",
    "NodeConfig"
]

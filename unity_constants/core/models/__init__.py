"""
Domain models — Pydantic types for the generator.

All models are re-exported here for convenient access:

    from unity_constants.core.models import ConstantsDocument, CategoryBlock, Constant
"""

from unity_constants.core.models.config import GeneratorConfig
from unity_constants.core.models.document import (
    GENERATED_HEADER,
    CategoryBlock,
    Constant,
    ConstantsDocument,
)
from unity_constants.core.models.source import (
    LAYER_SLOT_COUNT,
    LayerSlot,
    SceneEntry,
    SortingLayerEntry,
)

__all__ = [
    "GENERATED_HEADER",
    "LAYER_SLOT_COUNT",
    # document.py
    "CategoryBlock",
    "Constant",
    "ConstantsDocument",
    # config.py
    "GeneratorConfig",
    # source.py
    "LayerSlot",
    "SceneEntry",
    "SortingLayerEntry",
]

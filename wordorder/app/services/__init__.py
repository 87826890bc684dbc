"""Application service-layer helpers."""

from wordorder.app.services.placement_flow import (
    HeldTokenState,
    OccupiedSlotPolicy,
    PlacementActionResult,
    PlacementFlowService,
)

__all__ = [
    "HeldTokenState",
    "OccupiedSlotPolicy",
    "PlacementActionResult",
    "PlacementFlowService",
]

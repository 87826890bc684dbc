"""Placement engine error taxonomy."""

from __future__ import annotations

from enum import StrEnum


class PlacementFault(StrEnum):
    """Reason a move was rejected."""

    INCONSISTENT_STATE = "INCONSISTENT_STATE"
    SLOT_OCCUPIED = "SLOT_OCCUPIED"
    INVALID_LOCATION = "INVALID_LOCATION"


class PlacementError(Exception):
    """Base class for rejected engine operations."""

    fault: PlacementFault

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InconsistentStateError(PlacementError):
    """Token is not where the caller claims it is, or the invariant broke."""

    fault = PlacementFault.INCONSISTENT_STATE


class SlotOccupiedError(PlacementError):
    """Pool-to-slot move targets a slot that already holds a token."""

    fault = PlacementFault.SLOT_OCCUPIED


class InvalidLocationError(PlacementError):
    """Position is outside the addressed container."""

    fault = PlacementFault.INVALID_LOCATION

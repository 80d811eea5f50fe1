"""Pydantic models for API I/O."""

from .chemistry import (
    CardPayload,
    ChemistryRequest,
    ChemistryResponse,
    ChemistryTraceResponse,
    NormalizeRequest,
    NormalizeResponse,
    SlotChemistryResponse,
    TraceRowResponse,
)
from .formation import FormationResponse, SlotResponse

__all__ = [
    "CardPayload",
    "ChemistryRequest",
    "ChemistryResponse",
    "ChemistryTraceResponse",
    "FormationResponse",
    "NormalizeRequest",
    "NormalizeResponse",
    "SlotChemistryResponse",
    "SlotResponse",
    "TraceRowResponse",
]

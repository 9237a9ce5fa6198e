"""
vision/schemas.py
=================
Pydantic models for the classification service contract.

Field names on the wire are camelCase (``totalWeight``,
``trafficLevel`` …); Python code uses the snake_case attribute names.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class VehicleBreakdownModel(BaseModel):
    """Per-class vehicle counts."""
    bikes: int = Field(0, ge=0)
    cars: int = Field(0, ge=0)
    autos: int = Field(0, ge=0)
    buses: int = Field(0, ge=0)
    trucks: int = Field(0, ge=0)


class AnalysisResultModel(BaseModel):
    """One classification answer for one road image.

    ``totalWeight`` and ``trafficLevel`` are optional because the
    controller recomputes both from the breakdown.
    """
    model_config = ConfigDict(populate_by_name=True)

    breakdown: VehicleBreakdownModel
    total_weight: Optional[int] = Field(None, alias="totalWeight", ge=0)
    traffic_level: Optional[Literal["Low", "Medium", "High"]] = Field(
        None, alias="trafficLevel"
    )
    ambulance_detected: bool = Field(False, alias="ambulanceDetected")
    accident_detected: bool = Field(False, alias="accidentDetected")


class ClassificationRequest(BaseModel):
    """Body posted to the classifier (and accepted by ``/roads/{id}/image``)."""
    image: str = Field(..., min_length=1, description="Base64-encoded image bytes")
    mime_type: str = Field("image/jpeg", alias="mimeType")

    model_config = ConfigDict(populate_by_name=True)

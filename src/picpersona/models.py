from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

# The four quiz outcomes, in their canonical (tie-breaking) order
Category = Literal["tetoman", "egenman", "tetowoman", "egenwoman"]
Gender = Literal["male", "female", "random"]
Language = Literal["ko", "en"]
DominantColor = Literal["warm", "cool", "neutral"]
ImageQuality = Literal["high", "medium", "low"]


class ImageFeatures(BaseModel):
    """
    Coarse visual descriptors of one normalized portrait.

    Field aliases are the camelCase names a browser client uses, so the
    same record can be posted back to /api/categorize as JSON.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    brightness: float = Field(ge=0, le=255)
    contrast: float = Field(ge=0, le=255)
    colorfulness: float = Field(ge=0)
    dominant_color: DominantColor = Field(alias="dominantColor")
    face_detected: bool = Field(alias="faceDetected")
    image_quality: ImageQuality = Field(alias="imageQuality")
    aspect_ratio: float = Field(gt=0, alias="aspectRatio")
    face_confidence: float = Field(ge=0, le=1, alias="faceConfidence")
    edge_detection: int = Field(ge=0, alias="edgeDetection")
    # Diagnostics consumed by the face estimator; absent on client payloads
    skin_tone_ratio: Optional[float] = Field(default=None, ge=0, le=1, alias="skinToneRatio")
    facial_pattern: Optional[bool] = Field(default=None, alias="facialPattern")


class CategoryContent(BaseModel):
    """Static localized copy for one category."""

    model_config = ConfigDict(populate_by_name=True)

    type: Category
    title: str
    description: str
    traits: List[str] = Field(default_factory=list)
    fun_facts: List[str] = Field(default_factory=list, alias="funFacts")
    celeb_ref: str = Field(alias="celebRef")


class CategorizationResult(CategoryContent):
    """
    What we return for one analysis request.
    Created once, never mutated; optionally stored for analytics.
    """

    # Face confidence of the analyzed image; None when the client sent no features
    confidence: Optional[float] = Field(default=None, ge=0, le=1)
    language: Language
    gender: Gender
    features: Optional[ImageFeatures] = None
    created_at: datetime = Field(alias="createdAt")


class AnalysisRecord(BaseModel):
    """
    Row appended to the analytics table. Never updated or deleted.
    """

    category: Category
    confidence: Optional[float] = None
    language: Language
    gender: Gender
    features: Optional[Dict[str, Any]] = None
    created_at: datetime


class StatsResponse(BaseModel):
    """
    Aggregate counts over stored analysis records.
    """

    total: int
    by_category: Dict[str, int] = Field(default_factory=dict)
    by_gender: Dict[str, int] = Field(default_factory=dict)
    by_language: Dict[str, int] = Field(default_factory=dict)
    average_confidence: Optional[float] = None

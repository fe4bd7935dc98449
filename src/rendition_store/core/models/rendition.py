"""Shared rendition models."""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictStr,
    field_validator,
)

from rendition_store.core.utils.constants import ORIGINAL_STYLE


class GravityAnchor(str, Enum):
    """Compass point on which a responsive crop should be centred."""

    NORTH_WEST = "NorthWest"
    NORTH = "North"
    NORTH_EAST = "NorthEast"
    WEST = "West"
    CENTER = "Center"
    EAST = "East"
    SOUTH_WEST = "SouthWest"
    SOUTH = "South"
    SOUTH_EAST = "SouthEast"


class FaceBoundingBox(BaseModel):
    """Face geometry relative to the image size.

    Detectors may report values slightly outside [0, 1].
    """

    model_config = ConfigDict(frozen=True)

    left: float = 0.0
    top: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @property
    def area(self) -> float:
        return self.width * self.height

    @classmethod
    def from_rekognition(cls, bounding_box: Mapping[str, Any]) -> "FaceBoundingBox":
        return cls(
            left=float(bounding_box.get("Left") or 0.0),
            top=float(bounding_box.get("Top") or 0.0),
            width=float(bounding_box.get("Width") or 0.0),
            height=float(bounding_box.get("Height") or 0.0),
        )


class Label(BaseModel):
    """Label detected in an image."""

    model_config = ConfigDict(frozen=True)

    name: StrictStr
    confidence: float = 0.0

    @classmethod
    def from_rekognition(cls, label: Mapping[str, Any]) -> "Label":
        return cls(
            name=str(label.get("Name", "")),
            confidence=float(label.get("Confidence") or 0.0),
        )


class Fingerprint(BaseModel):
    """Digests and resolved storage key for one rendition."""

    model_config = ConfigDict(frozen=True)

    original_digest: StrictStr
    rendered_digest: StrictStr
    key: StrictStr
    extension: StrictStr


class UploadRequest(BaseModel):
    """Validation model for a rendition write."""

    model_config = ConfigDict(extra="forbid")

    file: Any = Field(..., description="Seekable binary stream")
    image_id: str = Field(..., min_length=1, description="Logical identifier")
    key: str | None = Field(None, description="Explicit storage key override")
    style_name: str = Field(ORIGINAL_STYLE, min_length=1)
    convert_options: list[str] = Field(default_factory=list)
    content_type: str = Field(..., min_length=1, description="Declared MIME type")

    @field_validator("file", mode="before")
    @classmethod
    def validate_file(cls, value: Any) -> Any:
        """The write path rewinds the stream several times."""
        seekable = getattr(value, "seekable", None)
        if not callable(seekable) or not seekable():
            raise ValueError("file must be a seekable binary stream")
        return value

    @field_validator("key")
    @classmethod
    def validate_key(cls, value: str | None) -> str | None:
        if value is not None and not value:
            raise ValueError("key must not be empty")
        return value


class RenditionResult(BaseModel):
    """Outcome of a rendition write."""

    fingerprint: StrictStr = Field(..., description="MD5 hex digest of the stored bytes")
    metadata: dict[str, str] = Field(default_factory=dict, description="Tags read from the original file")
    extension: StrictStr = Field(..., description="Dotted file extension, e.g. '.jpg'")
    filename: StrictStr = Field(..., description="Storage key the rendition was written to")
    keywords: list[str] = Field(default_factory=list, description="Detected label names")
    gravity: GravityAnchor = Field(GravityAnchor.CENTER, description="Crop anchor")

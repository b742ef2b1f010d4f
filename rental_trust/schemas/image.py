"""
Pydantic schemas for image processing options and results.
"""

from pydantic import BaseModel, Field
from typing import Literal, Optional


class ResizeOptions(BaseModel):
    width: Optional[int] = Field(None, gt=0)
    height: Optional[int] = Field(None, gt=0)
    fit: Literal["cover", "contain", "fill", "inside", "outside"] = "cover"
    format: Literal["jpeg", "png", "webp", "avif"] = "webp"
    quality: int = Field(80, ge=1, le=100)


class ImageProcessResult(BaseModel):
    """Processing outcome; data is set on success, error otherwise."""

    success: bool
    data: Optional[bytes] = None
    format: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[int] = None
    error: Optional[str] = None


class ImageMetadata(BaseModel):
    width: int
    height: int
    format: Optional[str] = None
    size: int


class ImageValidationResult(BaseModel):
    valid: bool
    error: Optional[str] = None

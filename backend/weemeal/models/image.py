# weemeal/models/image.py
from typing import Literal, Optional

from pydantic import BaseModel


class ImageResult(BaseModel):
    url: str
    attribution: Optional[str] = None
    source: Literal["unsplash", "placeholder"]


class ImageResponse(BaseModel):
    # "stored" / "custom" come from the image endpoints, not from the pipeline
    imageUrl: Optional[str] = None
    attribution: Optional[str] = None
    source: Optional[str] = None
    message: Optional[str] = None

"""
Atlas definition file schema.

An atlas file is a JSON document describing the canvas and its named regions:

    {
        "name": "ui",
        "texture_path": "ui.png",          # optional
        "width": 512,
        "height": 256,
        "regions": [
            {"name": "button", "x": 0, "y": 0, "width": 64, "height": 32,
             "rotated": false, "uv": [0.0, 0.0, 0.125, 0.125]}
        ]
    }

UVS:
- [u1, v1, u2, v2] normalized (0-1) against the atlas width/height
- Recomputed from the pixel rect on load, stored for consumers that read the
  file without this package
"""

from __future__ import annotations
from typing import List, Optional
from pydantic import BaseModel, Field, ConfigDict, model_validator


class RegionDefinition(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., min_length=1, description="Unique region name within the atlas.")
    x: int = Field(..., ge=0, description="Left edge in pixels.")
    y: int = Field(..., ge=0, description="Top edge in pixels.")
    width: int = Field(..., gt=0, description="Region width in pixels.")
    height: int = Field(..., gt=0, description="Region height in pixels.")
    rotated: bool = Field(False, description="Stored rotated 90 degrees in the atlas.")
    uv: Optional[List[float]] = Field(None, description="[u1, v1, u2, v2] normalized (0-1).", min_length=4, max_length=4)


class AtlasDocument(BaseModel):
    model_config = ConfigDict(extra='forbid')

    name: str = Field(..., description="Atlas name.")
    texture_path: Optional[str] = Field(None, description="Path of the texture image this atlas describes.")
    width: int = Field(0, ge=0, description="Atlas width in pixels.")
    height: int = Field(0, ge=0, description="Atlas height in pixels.")
    regions: List[RegionDefinition] = Field(default_factory=list, description="Regions in insertion order.")

    @model_validator(mode='after')
    def validate_unique_names(self):
        names = [r.name for r in self.regions]
        if len(names) != len(set(names)):
            raise ValueError("Region names must be unique")
        return self

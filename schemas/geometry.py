"""
Geometry and unsharp option models.

These models are an optional typed front-end for the formatters in
``magick``; the formatters also accept plain mappings with the same
(camelCase) keys.
"""

from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from core.constants import UnsharpDefaults

Number = Union[int, float]


class GeometrySpec(BaseModel):
    """
    Size/offset description rendered as an ImageMagick geometry string.

    Only one shape is used per geometry; see ``magick.geometry.geometry``
    for the priority order when several are set.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    # === Shapes ===
    scale: Optional[Number] = Field(default=None, description="Uniform scale in percent")
    area: Optional[Number] = Field(default=None, description="Target pixel area")
    scale_width: Optional[Number] = Field(
        default=None, alias="scaleWidth", description="Horizontal scale in percent"
    )
    scale_height: Optional[Number] = Field(
        default=None, alias="scaleHeight", description="Vertical scale in percent"
    )
    width: Optional[Number] = Field(default=None, description="Width in pixels")
    height: Optional[Number] = Field(default=None, description="Height in pixels")
    opacity: Optional[Number] = Field(default=None, description="Opacity (shadow geometry)")
    sigma: Optional[Number] = Field(default=None, description="Sigma (shadow geometry)")

    # === Width/height modifiers ===
    preserve_aspect: Optional[bool] = Field(
        default=None, alias="preserveAspect", description="False forces exact size (!)"
    )
    only_shrink: Optional[bool] = Field(
        default=None, alias="onlyShrink", description="Only shrink larger images (>)"
    )
    only_enlarge: Optional[bool] = Field(
        default=None, alias="onlyEnlarge", description="Only enlarge smaller images (<)"
    )
    fill: Optional[bool] = Field(default=None, description="Fill the area (^)")

    # === Offset ===
    offset_x: Optional[Number] = Field(default=None, alias="offsetX")
    offset_y: Optional[Number] = Field(default=None, alias="offsetY")
    use_percentage: Optional[bool] = Field(
        default=None, alias="usePercentage", description="Offsets are percentages"
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase mapping consumed by the formatter."""
        return self.model_dump(by_alias=True, exclude_none=True)


class UnsharpSpec(BaseModel):
    """Parameters of the -unsharp option"""

    model_config = ConfigDict(extra="forbid")

    sigma: float = Field(default=UnsharpDefaults.SIGMA, ge=0)
    radius: float = Field(default=UnsharpDefaults.RADIUS, ge=0)
    gain: float = Field(default=UnsharpDefaults.GAIN)
    threshold: float = Field(default=UnsharpDefaults.THRESHOLD, ge=0)

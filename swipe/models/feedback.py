"""
Visual feedback model: the per-frame tuple the host UI renders.
"""

from pydantic import BaseModel, ConfigDict


class VisualFeedback(BaseModel):
    """Card rotation and overlay opacities for one drag offset."""

    model_config = ConfigDict(frozen=True)

    offset: float
    rotation: float
    accept_opacity: float
    reject_opacity: float
    card_opacity: float = 1.0

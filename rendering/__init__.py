"""
Rendering - camera, label projection and the pygame scene renderer
"""

from .camera import PerspectiveCamera, OrbitControls
from .label_projector import (
    LabelProjector,
    project_point,
    project_points,
    label_anchor,
    is_on_screen,
)

__all__ = [
    'PerspectiveCamera',
    'OrbitControls',
    'LabelProjector',
    'project_point',
    'project_points',
    'label_anchor',
    'is_on_screen',
]

"""
UI Module - Overlay widgets and screens
"""
from .theme import get_theme, Colors, Fonts
from .base_screen import BaseScreen
from .components import Button, Panel, Label, Slider

__all__ = [
    "get_theme", "Colors", "Fonts",
    "BaseScreen",
    "Button", "Panel", "Label", "Slider",
]

from .actor import Actor, StaticBody
from .appearance import Appearance, AnimatedSprite, FilledBox, FilledCircle, ImageSprite

__all__ = [
    "Actor",
    "StaticBody",
    "Appearance",
    "AnimatedSprite",
    "FilledBox",
    "FilledCircle",
    "ImageSprite",
]

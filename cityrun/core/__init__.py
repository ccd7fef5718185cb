from .camera import Camera, CameraMode
from .frame import FrameDriver
from .zplanes import LayerHandle, ZPlanes

__all__ = [
    "Camera",
    "CameraMode",
    "FrameDriver",
    "LayerHandle",
    "ZPlanes",
]

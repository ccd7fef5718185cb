"""
CityRun: viewport camera and z-plane renderer for a 2D side-scroller.

`from cityrun.core.camera import Camera` is the usual starting point.
"""
__all__ = ["core", "entities", "utils", "demo"]
__version__ = "0.1.0"

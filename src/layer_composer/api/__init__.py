from layer_composer.api.geometry import Rect, Size
from layer_composer.api.raster import RasterHandle, decode_raster
from layer_composer.api.resizer import bounded_size
from layer_composer.api.surface import Preview, Surface
from layer_composer.api.transform import TransformModel
from layer_composer.api.interaction import DragSession, InteractionController, PointerEvent
from layer_composer.api.effects import PostEffect, SoftLightWash
from layer_composer.api.composer import ImageComposer

__all__ = [
    "DragSession",
    "ImageComposer",
    "InteractionController",
    "PointerEvent",
    "PostEffect",
    "Preview",
    "RasterHandle",
    "Rect",
    "Size",
    "SoftLightWash",
    "Surface",
    "TransformModel",
    "bounded_size",
    "decode_raster",
]

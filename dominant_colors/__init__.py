# dominant_colors/__init__.py
"""
dominant_colors package.

Purpose:
  Find the N dominant colours of an image by recursively bisecting colour
  classes along their principal axis. See find_dominant_colors.py for CLI.

Public API:
  find_dominant_colors : quantize an RGB(A) uint8 image into N classes.
  QuantizeResult       : colours, pixel counts, quantized image, class map, tree.
  ClassTree            : binary tree of colour classes with search helpers.
  render               : swatch / class-view / quantized-image builders.
  image_io             : Pillow load/save/resize helpers for the CLI.
  errors               : InvalidColorCount, EmptyOrUnreadableImage, DegenerateClass.

Quick start:
  from dominant_colors import find_dominant_colors
  result = find_dominant_colors(rgb_u8, 5)
  result.colors  # [(r, g, b), ...]
"""

__version__ = "0.1.0"

# Re-export namespaces for convenience.
from . import constants
from . import core_types
from . import errors
from . import image_io
from . import render
from . import stats
from . import utils

from .errors import (  # noqa: E402,F401
    DegenerateClass,
    DominantColorsError,
    EmptyOrUnreadableImage,
    InvalidColorCount,
)
from .quantize import QuantizeResult, build_class_tree, find_dominant_colors  # noqa: E402,F401
from .render import class_visualization, palette_swatch, quantized_image  # noqa: E402,F401
from .tree import ClassTree, ColorClassNode  # noqa: E402,F401

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "errors",
    "image_io",
    "render",
    "stats",
    "utils",
    "DominantColorsError",
    "InvalidColorCount",
    "EmptyOrUnreadableImage",
    "DegenerateClass",
    "QuantizeResult",
    "build_class_tree",
    "find_dominant_colors",
    "class_visualization",
    "palette_swatch",
    "quantized_image",
    "ClassTree",
    "ColorClassNode",
]

# dominant_colors/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import RGBTuple, U8Image
from .errors import EmptyOrUnreadableImage

"""
Image I/O helpers (RGB in sRGB), alpha flattening, and resize utilities.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]


def pillow_resample_from_name(name: str) -> Image.Resampling:
    """Map a string to a Pillow resampling filter enum."""
    if name == "nearest":
        return Image.Resampling.NEAREST
    if name == "bilinear":
        return Image.Resampling.BILINEAR
    if name == "bicubic":
        return Image.Resampling.BICUBIC
    if name == "lanczos":
        return Image.Resampling.LANCZOS
    return Image.Resampling.BICUBIC  # default


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im.convert("RGBA"),
                src_prof,
                dst_prof,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def flatten_alpha(rgba: np.ndarray, background: Optional[RGBTuple] = None) -> U8Image:
    """
    Drop the alpha channel of an (H,W,4) array.

    With `background`, composite over that colour first; otherwise the colour
    channels are kept as stored.
    """
    rgb = rgba[..., :3]
    if background is None or rgba.shape[-1] < 4:
        return np.ascontiguousarray(rgb, dtype=np.uint8)
    alpha = rgba[..., 3:4].astype(np.float32) / 255.0
    bg = np.asarray(background, dtype=np.float32).reshape(1, 1, 3)
    out = rgb.astype(np.float32) * alpha + bg * (1.0 - alpha)
    return np.clip(np.rint(out), 0, 255).astype(np.uint8)


def load_image_rgb(path: Path, background: Optional[RGBTuple] = None) -> U8Image:
    """Load an image with Pillow as sRGB, flatten alpha, return uint8 (H,W,3)."""
    try:
        with Image.open(path) as im0:
            im = _convert_to_srgb_rgba(im0)
    except (UnidentifiedImageError, OSError) as exc:
        raise EmptyOrUnreadableImage(f"Unable to open the file: {path}") from exc
    arr = np.array(im, dtype=np.uint8)
    if arr.size == 0:
        raise EmptyOrUnreadableImage(f"no image data: {path}")
    return flatten_alpha(arr, background)


def save_png_rgb(path: Path, rgb: U8Image) -> Path:
    """Save an RGB array as PNG. Forces a .png suffix."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8)).save(path)
    return path


def resize_rgb_width(
    rgb: U8Image, dst_w: Optional[int], resample: Image.Resampling
) -> U8Image:
    """Downscale so width <= dst_w, keeping aspect. Never upscales."""
    H0, W0, _ = rgb.shape
    if dst_w is None or dst_w <= 0 or dst_w >= W0:
        return rgb

    dst_h = max(1, int(round(H0 * (dst_w / float(W0)))))
    im = Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8))
    im2 = im.resize((dst_w, dst_h), resample=resample)
    return np.array(im2, dtype=np.uint8)


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "pillow_resample_from_name",
    "flatten_alpha",
    "load_image_rgb",
    "save_png_rgb",
    "resize_rgb_width",
    "is_image_file",
]

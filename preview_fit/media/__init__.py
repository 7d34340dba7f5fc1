"""Frame and still-image helpers built on OpenCV and Pillow."""

from .frames import load_upright_image, normalize_orientation, render_preview, save_image

__all__ = ["load_upright_image", "normalize_orientation", "render_preview", "save_image"]

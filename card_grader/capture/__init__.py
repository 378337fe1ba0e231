"""Image capture and normalization."""

from .normalize import ImageNormalizer, image_normalizer, normalize_image

__all__ = ["ImageNormalizer", "image_normalizer", "normalize_image"]

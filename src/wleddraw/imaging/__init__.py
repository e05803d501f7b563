"""Image import for the pixel grid."""

from .sampler import ImageSampler, adjust_pixels, contrast_factor, pixels_to_hex

__all__ = ["ImageSampler", "adjust_pixels", "contrast_factor", "pixels_to_hex"]

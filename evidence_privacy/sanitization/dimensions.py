import math


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def compute_target_dimensions(
    width: int,
    height: int,
    max_width: int,
    max_height: int,
) -> tuple[int, int]:
    """Fit (width, height) into the bounding box, preserving aspect ratio.

    Width is clamped first; then, independently, height is clamped, which
    may shrink the already clamped width again. Never upscales.

    Raises:
        ValueError: if any dimension is not positive.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Image dimensions must be positive, got {width}x{height}")
    if max_width <= 0 or max_height <= 0:
        raise ValueError(f"Bounds must be positive, got {max_width}x{max_height}")

    aspect_ratio = width / height
    target_width, target_height = width, height

    if target_width > max_width:
        target_width = max_width
        target_height = _round_half_up(target_width / aspect_ratio)

    if target_height > max_height:
        target_height = max_height
        target_width = _round_half_up(target_height * aspect_ratio)

    target_width = max(1, min(target_width, max_width, width))
    target_height = max(1, min(target_height, max_height, height))
    return target_width, target_height

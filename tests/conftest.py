import io

import numpy as np
import pytest
from PIL import Image, ImageCms, PngImagePlugin

from helpers.media import (
    AUTHOR_TEXT,
    CAPTURE_TIME,
    TAG_ORIENTATION,
    ImageFactory,
    encode_image,
    metadata_exif,
)


@pytest.fixture()
def image_factory() -> ImageFactory:
    """Build encoded images: image_factory(width, height, fmt='JPEG', ...)."""

    def factory(
        width: int,
        height: int,
        fmt: str = "JPEG",
        mode: str = "RGB",
        color: tuple[int, ...] = (120, 80, 40),
        **save_kwargs: object,
    ) -> bytes:
        return encode_image(Image.new(mode, (width, height), color), fmt, **save_kwargs)

    return factory


@pytest.fixture()
def noisy_jpeg_bytes() -> bytes:
    """A 256x256 JPEG of random pixels, large enough that truncation breaks decoding."""
    rng = np.random.default_rng(3)
    pixels = rng.integers(0, 256, size=(256, 256, 3), dtype=np.uint8)
    return encode_image(Image.fromarray(pixels), "JPEG", quality=95)


@pytest.fixture()
def exif_jpeg_bytes() -> bytes:
    """A 640x480 JPEG carrying EXIF camera, capture time, GPS and an ICC profile."""
    icc = ImageCms.ImageCmsProfile(ImageCms.createProfile("sRGB")).tobytes()
    image = Image.new("RGB", (640, 480), (60, 140, 90))
    return encode_image(image, "JPEG", exif=metadata_exif(), icc_profile=icc, quality=90)


@pytest.fixture()
def large_exif_jpeg_bytes() -> bytes:
    """A 4000x3000 JPEG with EXIF GPS tags."""
    image = Image.new("RGB", (4000, 3000), (90, 110, 70))
    return encode_image(image, "JPEG", exif=metadata_exif(), quality=85)


@pytest.fixture()
def png_with_text_bytes() -> bytes:
    """A PNG whose text chunks name the author and capture time."""
    info = PngImagePlugin.PngInfo()
    info.add_text("Author", AUTHOR_TEXT)
    info.add_text("Creation Time", CAPTURE_TIME)
    image = Image.new("RGB", (320, 240), (200, 200, 200))
    return encode_image(image, "PNG", pnginfo=info)


@pytest.fixture()
def rotated_jpeg_bytes() -> bytes:
    """A 200x100 JPEG whose EXIF orientation says 'rotate 90 degrees clockwise'."""
    exif = Image.Exif()
    exif[TAG_ORIENTATION] = 6
    return encode_image(Image.new("RGB", (200, 100), (10, 20, 30)), "JPEG", exif=exif)


@pytest.fixture()
def animated_gif_bytes() -> bytes:
    """A two-frame 64x48 GIF."""
    frames = [Image.new("P", (64, 48), 1), Image.new("P", (64, 48), 2)]
    buf = io.BytesIO()
    frames[0].save(buf, format="GIF", save_all=True, append_images=frames[1:], duration=100)
    return buf.getvalue()


@pytest.fixture()
def rgba_png_bytes() -> bytes:
    """A 50x40 mid-gray PNG with a horizontal alpha gradient."""
    pixels = np.full((40, 50, 4), 128, dtype=np.uint8)
    pixels[..., 3] = np.linspace(0, 255, 50, dtype=np.uint8)[np.newaxis, :]
    return encode_image(Image.fromarray(pixels), "PNG")

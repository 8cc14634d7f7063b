#!/usr/bin/env python3
"""
Batch image resizer: walks a source directory and resizes every png/jpg/jpeg
file in place, either to an exact size or by a scale factor.

Files are overwritten; there is no backup. The first failure aborts the run.
"""
import os
from collections.abc import Iterator

from PIL import Image, ImageFilter

from .errors import ImageIoError, PathError
from .options import AbsoluteSize, FilterKind, ResizeConfig, ResizeMode, ScaleFactor

# Matched case-sensitively against the suffix without its dot
IMAGE_EXTENSIONS = ("png", "jpg", "jpeg")

JPEG_EXTENSIONS = ("jpg", "jpeg")
JPEG_MODES = ("RGB", "L", "CMYK")

PIL_FILTERS = {
    FilterKind.NEAREST: Image.NEAREST,
    FilterKind.LINEAR: Image.BILINEAR,
    FilterKind.CUBIC: Image.BICUBIC,
    FilterKind.GAUSSIAN: Image.BILINEAR,
    FilterKind.LANCZOS3: Image.LANCZOS,
}

GAUSSIAN_SIGMA = 0.5


def _extension(path: str) -> str:
    return os.path.splitext(path)[1][1:]


def _raise_walk_error(err: OSError) -> None:
    raise PathError(f"Cannot read directory {err.filename}: {err.strerror or err}") from err


def is_image_file(path: str) -> bool:
    return os.path.isfile(path) and _extension(path) in IMAGE_EXTENSIONS


def iter_image_files(source_dir: str) -> Iterator[str]:
    """
    Yield every image file under source_dir, in os.walk order.
    A directory that cannot be listed raises PathError.
    """
    for root, _, files in os.walk(source_dir, onerror=_raise_walk_error):
        for fname in files:
            path = os.path.join(root, fname)
            if is_image_file(path):
                yield path


def target_size(mode: ResizeMode, native_size: tuple[int, int]) -> tuple[int, int]:
    """
    Compute the output size for an image of native_size under the given mode.
    Scaled sides are truncated towards zero.
    """
    if isinstance(mode, AbsoluteSize):
        return mode.width, mode.height
    if isinstance(mode, ScaleFactor):
        width, height = native_size
        return int(width * mode.scale), int(height * mode.scale)
    raise TypeError(f"Unknown resize mode: {mode!r}")


def resample(img: Image.Image, size: tuple[int, int], filter_kind: FilterKind) -> Image.Image:
    """
    Resize img to size with the Pillow filter matching filter_kind.
    """
    if img.mode == "P":
        img = img.convert("RGBA")
    if filter_kind is FilterKind.GAUSSIAN:
        # Widen the blur with the reduction ratio so downscaling does not alias
        ratio = max(img.width / size[0], img.height / size[1], 1.0)
        img = img.filter(ImageFilter.GaussianBlur(GAUSSIAN_SIGMA * ratio))
    return img.resize(size, PIL_FILTERS[filter_kind])


def resize_image_file(
    path: str, config: ResizeConfig
) -> tuple[tuple[int, int], tuple[int, int]]:
    """
    Resize a single image and overwrite it.

    Returns:
        The (native size, new size) pair.

    Raises:
        ImageIoError: the image could not be decoded, resized or saved.
    """
    try:
        with Image.open(path) as img:
            img.load()
            native = img.size
            size = target_size(config.mode, native)
            if size[0] < 1 or size[1] < 1:
                raise ImageIoError(
                    path, f"target size {size[0]}x{size[1]} from {native[0]}x{native[1]} is empty"
                )
            resized = resample(img, size, config.filter)

        if _extension(path) in JPEG_EXTENSIONS and resized.mode not in JPEG_MODES:
            resized = resized.convert("RGB")
        # Format follows the extension
        resized.save(path)
    except (
        OSError,
        ValueError,
        OverflowError,
        MemoryError,
        Image.DecompressionBombError,
    ) as e:
        raise ImageIoError(path, str(e)) from e

    print(f"Resized: {path} ({native[0]}x{native[1]} -> {size[0]}x{size[1]})")
    return native, size


def check_source_dir(source_dir: str) -> None:
    if not os.path.isdir(source_dir):
        raise PathError(f"Source path is not a directory: {source_dir}")


def run(source_dir: str, config: ResizeConfig) -> int:
    """
    Resize every image under source_dir according to config.

    Returns the number of files resized. Stops at the first failing file.
    """
    check_source_dir(source_dir)
    count = 0
    for path in iter_image_files(source_dir):
        resize_image_file(path, config)
        count += 1
    return count

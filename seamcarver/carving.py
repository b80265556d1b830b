"""
High-level carving functions that drive a SeamCarver to a target size.
"""

import logging
import time

import torch

from .carver import SeamCarver
from .energy import BORDER_ENERGY
from .image_io import load_image, save_image

logger = logging.getLogger(__name__)


def resize(image, width: int, height: int,
           border_energy: float = BORDER_ENERGY) -> torch.Tensor:
    """
    Shrink an image to (width, height) by seam carving.

    All vertical seams are removed first, then all horizontal seams.

    Args:
        image: RGB image, anything SeamCarver accepts
        width: Target width, strictly less than the current width
        height: Target height, strictly less than the current height
        border_energy: Energy assigned to border pixels

    Returns:
        Carved image tensor (3, height, width), uint8

    Raises:
        ValueError: if the target is not strictly smaller in both dimensions
    """
    carver = SeamCarver(image, border_energy=border_energy)

    if not (1 <= width < carver.width() and 1 <= height < carver.height()):
        raise ValueError(
            f"Target size {width}x{height} must be at least 1x1 and strictly "
            f"smaller than {carver.width()}x{carver.height()}")

    remove_columns = carver.width() - width
    remove_rows = carver.height() - height

    start = time.perf_counter()

    for i in range(remove_columns):
        seam = carver.find_vertical_seam()
        carver.remove_vertical_seam(seam)

    for i in range(remove_rows):
        seam = carver.find_horizontal_seam()
        carver.remove_horizontal_seam(seam)

    elapsed = time.perf_counter() - start
    logger.info("Removed %d columns and %d rows in %.3f seconds",
                remove_columns, remove_rows, elapsed)

    return carver.image()


def resize_file(src, dst, width: int, height: int,
                border_energy: float = BORDER_ENERGY) -> torch.Tensor:
    """Load ``src``, resize it and save the result to ``dst``."""
    image = load_image(src)
    logger.info("Loaded %s (%dx%d)", src, image.shape[2], image.shape[1])

    carved = resize(image, width, height, border_energy=border_energy)
    save_image(carved, dst)
    logger.info("Saved %s (%dx%d)", dst, carved.shape[2], carved.shape[1])

    return carved

"""
Stateful seam-carving engine.

A SeamCarver owns the current image and its energy map. Seams are found
against the cached energies; removing a seam replaces the image and the
energy map together.

Horizontal operations transpose the state, run the vertical code path and
transpose back.
"""

import logging
from contextlib import contextmanager

import torch

from .energy import BORDER_ENERGY, dual_gradient_energy
from .image_io import to_image_tensor
from .seam import SeamLike, dp_seam, remove_seam

logger = logging.getLogger(__name__)


class SeamCarver:
    """
    Content-aware image shrinking, one seam at a time.

    Not thread-safe: a seam returned by a find call is only valid until the
    next removal, so callers must alternate find and remove.

    Args:
        image: RGB image as a tensor (3, H, W), numpy array (H, W, 3) or
               PIL image. It is copied; later changes to it are not seen.
        border_energy: Energy assigned to every border pixel
    """

    def __init__(self, image, border_energy: float = BORDER_ENERGY):
        if image is None:
            raise ValueError("Image must not be None")

        self._border_energy = float(border_energy)
        self._image = to_image_tensor(image)
        self._energy = dual_gradient_energy(self._image, self._border_energy)

    def __repr__(self):
        return f"SeamCarver(width={self.width()}, height={self.height()})"

    @property
    def border_energy(self) -> float:
        return self._border_energy

    def width(self) -> int:
        return self._image.shape[2]

    def height(self) -> int:
        return self._image.shape[1]

    def image(self) -> torch.Tensor:
        """Copy of the current image (3, H, W), uint8."""
        return self._image.clone()

    def energy(self) -> torch.Tensor:
        """Copy of the current energy map (H, W)."""
        return self._energy.clone()

    def energy_at(self, col: int, row: int) -> float:
        """Energy of the pixel at column ``col`` and row ``row``."""
        if not 0 <= col < self.width() or not 0 <= row < self.height():
            raise IndexError(
                f"Pixel ({col}, {row}) outside {self.width()}x{self.height()} image")
        return self._energy[row, col].item()

    def find_vertical_seam(self) -> torch.Tensor:
        """Column index for each row, top to bottom."""
        return dp_seam(self._energy, direction='vertical')

    def find_horizontal_seam(self) -> torch.Tensor:
        """Row index for each column, left to right."""
        with self._transposed():
            return self.find_vertical_seam()

    def remove_vertical_seam(self, seam: SeamLike):
        self._remove_vertical_seam(seam)
        logger.debug("Removed vertical seam, image is now %dx%d",
                     self.width(), self.height())

    def remove_horizontal_seam(self, seam: SeamLike):
        if seam is None:
            raise ValueError("Seam must not be None")
        if self.height() <= 1:
            raise ValueError("Cannot remove a horizontal seam from an image one pixel tall")

        with self._transposed():
            self._remove_vertical_seam(seam)
        logger.debug("Removed horizontal seam, image is now %dx%d",
                     self.width(), self.height())

    def _remove_vertical_seam(self, seam: SeamLike):
        if seam is None:
            raise ValueError("Seam must not be None")
        if self.width() <= 1:
            raise ValueError("Cannot remove a vertical seam from an image one pixel wide")

        # remove_seam validates the seam before anything is replaced
        image = remove_seam(self._image, seam, direction='vertical')
        energy = dual_gradient_energy(image, self._border_energy)
        assert energy.shape == image.shape[1:]

        self._image, self._energy = image, energy

    def _transpose(self):
        # Deep, contiguous copies so the two orientations never share storage
        self._image = self._image.transpose(1, 2).clone(memory_format=torch.contiguous_format)
        self._energy = self._energy.t().clone(memory_format=torch.contiguous_format)

    @contextmanager
    def _transposed(self):
        self._transpose()
        try:
            yield
        finally:
            self._transpose()

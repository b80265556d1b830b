"""Tests for the stateful SeamCarver engine."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import torch
import pytest
from PIL import Image
from seamcarver.carver import SeamCarver
from seamcarver.energy import BORDER_ENERGY, dual_gradient_energy
from seamcarver.seam import dp_seam

from conftest import make_random_image, make_unique_image, make_uniform_image


def assert_connected(seam):
    if seam.numel() > 1:
        assert (seam[1:] - seam[:-1]).abs().max() <= 1


class TestConstruction:
    def test_none_image(self):
        with pytest.raises(ValueError):
            SeamCarver(None)

    @pytest.mark.parametrize("shape", [(4, 5, 5), (3, 0, 5), (3, 5, 0), (5,)])
    def test_bad_shapes(self, shape):
        with pytest.raises(ValueError):
            SeamCarver(torch.zeros(shape, dtype=torch.uint8))

    def test_dimensions(self, random_image):
        carver = SeamCarver(random_image)
        assert carver.width() == 10
        assert carver.height() == 12

    def test_accepts_pil_and_numpy(self, random_image):
        array = random_image.permute(1, 2, 0).numpy()
        from_numpy = SeamCarver(array)
        from_pil = SeamCarver(Image.fromarray(np.ascontiguousarray(array)))
        assert torch.equal(from_numpy.image(), random_image)
        assert torch.equal(from_pil.image(), random_image)

    def test_input_is_copied(self, random_image):
        """Changing the caller's tensor afterwards does not affect the carver."""
        original = random_image.clone()
        carver = SeamCarver(random_image)
        random_image.zero_()
        assert torch.equal(carver.image(), original)

    def test_image_returns_copy(self, random_image):
        carver = SeamCarver(random_image)
        snapshot = carver.image()
        snapshot.zero_()
        assert torch.equal(carver.image(), random_image)


class TestEnergyAt:
    def test_border_pixels(self, random_image):
        carver = SeamCarver(random_image)
        W, H = carver.width(), carver.height()
        for col in range(W):
            assert carver.energy_at(col, 0) == BORDER_ENERGY
            assert carver.energy_at(col, H - 1) == BORDER_ENERGY
        for row in range(H):
            assert carver.energy_at(0, row) == BORDER_ENERGY
            assert carver.energy_at(W - 1, row) == BORDER_ENERGY

    def test_matches_energy_map(self, random_image):
        carver = SeamCarver(random_image)
        energy = dual_gradient_energy(random_image)
        assert carver.energy_at(3, 7) == energy[7, 3].item()

    def test_zero_energy_is_a_real_value(self):
        """A flat interior pixel has energy exactly 0."""
        carver = SeamCarver(make_uniform_image(5, 5))
        assert carver.energy_at(2, 2) == 0.0

    @pytest.mark.parametrize("col,row", [(-1, 0), (0, -1), (10, 0), (0, 12), (10, 12)])
    def test_out_of_range(self, random_image, col, row):
        carver = SeamCarver(random_image)
        with pytest.raises(IndexError):
            carver.energy_at(col, row)

    def test_custom_border_energy(self, random_image):
        carver = SeamCarver(random_image, border_energy=1e6)
        assert carver.border_energy == 1e6
        assert carver.energy_at(0, 0) == 1e6


class TestFindSeams:
    def test_vertical_seam_shape(self, random_image):
        carver = SeamCarver(random_image)
        seam = carver.find_vertical_seam()
        assert seam.shape == (carver.height(),)
        assert (seam >= 0).all() and (seam < carver.width()).all()
        assert_connected(seam)

    def test_horizontal_seam_shape(self, random_image):
        carver = SeamCarver(random_image)
        seam = carver.find_horizontal_seam()
        assert seam.shape == (carver.width(),)
        assert (seam >= 0).all() and (seam < carver.height()).all()
        assert_connected(seam)

    def test_vertical_matches_dp_on_energy(self, random_image):
        carver = SeamCarver(random_image)
        expected = dp_seam(dual_gradient_energy(random_image))
        assert torch.equal(carver.find_vertical_seam(), expected)

    def test_horizontal_matches_dp_on_energy(self, random_image):
        carver = SeamCarver(random_image)
        expected = dp_seam(dual_gradient_energy(random_image), direction='horizontal')
        assert torch.equal(carver.find_horizontal_seam(), expected)

    def test_find_is_idempotent(self, random_image):
        """Two finds without a removal return the same seam and leave state alone."""
        carver = SeamCarver(random_image)
        energy = carver.energy()
        assert torch.equal(carver.find_vertical_seam(), carver.find_vertical_seam())
        assert torch.equal(carver.find_horizontal_seam(), carver.find_horizontal_seam())
        assert torch.equal(carver.energy(), energy)
        assert torch.equal(carver.image(), random_image)
        assert (carver.width(), carver.height()) == (10, 12)

    def test_vertical_seam_avoids_edge(self):
        """A sharp vertical edge has high energy; the seam stays in the flat part."""
        image = torch.zeros(3, 12, 12, dtype=torch.uint8)
        image[:, :, 6:] = 255
        seam = SeamCarver(image).find_vertical_seam()
        assert not ((seam[1:-1] == 5) | (seam[1:-1] == 6)).any()


class TestRemoveSeams:
    def test_remove_vertical_preserves_pixels(self, unique_image):
        carver = SeamCarver(unique_image)
        seam = carver.find_vertical_seam()
        carver.remove_vertical_seam(seam)

        assert (carver.width(), carver.height()) == (9, 12)
        carved = carver.image()
        for row in range(12):
            col = seam[row].item()
            expected = torch.cat([unique_image[:, row, :col], unique_image[:, row, col + 1:]], dim=1)
            assert torch.equal(carved[:, row], expected)

    def test_remove_horizontal_preserves_pixels(self, unique_image):
        carver = SeamCarver(unique_image)
        seam = carver.find_horizontal_seam()
        carver.remove_horizontal_seam(seam)

        assert (carver.width(), carver.height()) == (10, 11)
        carved = carver.image()
        for col in range(10):
            row = seam[col].item()
            expected = torch.cat([unique_image[:, :row, col], unique_image[:, row + 1:, col]], dim=1)
            assert torch.equal(carved[:, :, col], expected)

    def test_energy_recomputed_after_removal(self, random_image):
        carver = SeamCarver(random_image)
        carver.remove_vertical_seam(carver.find_vertical_seam())
        carver.remove_horizontal_seam(carver.find_horizontal_seam())
        assert torch.equal(carver.energy(), dual_gradient_energy(carver.image()))

    def test_accepts_list_seam(self, random_image):
        carver = SeamCarver(random_image)
        carver.remove_vertical_seam([4] * 12)
        assert carver.width() == 9

    def test_remove_down_to_one_column(self):
        carver = SeamCarver(make_random_image(4, 5, seed=3))
        while carver.width() > 1:
            carver.remove_vertical_seam(carver.find_vertical_seam())
        assert (carver.width(), carver.height()) == (1, 4)

        with pytest.raises(ValueError):
            carver.remove_vertical_seam(carver.find_vertical_seam())

    def test_remove_down_to_one_row(self):
        carver = SeamCarver(make_random_image(5, 4, seed=3))
        while carver.height() > 1:
            carver.remove_horizontal_seam(carver.find_horizontal_seam())
        assert (carver.width(), carver.height()) == (4, 1)

        with pytest.raises(ValueError):
            carver.remove_horizontal_seam(carver.find_horizontal_seam())

    @pytest.mark.parametrize("seam", [None, [0] * 11, [0] * 13, [10] * 12, [0, 2] + [2] * 10])
    def test_invalid_vertical_seam_leaves_state(self, random_image, seam):
        carver = SeamCarver(random_image)
        energy = carver.energy()
        with pytest.raises(ValueError):
            carver.remove_vertical_seam(seam)
        assert torch.equal(carver.image(), random_image)
        assert torch.equal(carver.energy(), energy)

    @pytest.mark.parametrize("seam", [None, [0] * 9, [0] * 12, [12] * 10, [5, 7] + [7] * 8])
    def test_invalid_horizontal_seam_leaves_state(self, random_image, seam):
        """A failed horizontal removal is transposed back to the original orientation."""
        carver = SeamCarver(random_image)
        energy = carver.energy()
        with pytest.raises(ValueError):
            carver.remove_horizontal_seam(seam)
        assert (carver.width(), carver.height()) == (10, 12)
        assert torch.equal(carver.image(), random_image)
        assert torch.equal(carver.energy(), energy)

    def test_uniform_three_by_three(self):
        """A flat 3x3 image has eight border pixels and one zero-energy
        center; it carves down to 1x1."""
        carver = SeamCarver(make_uniform_image(3, 3))
        for col in range(3):
            for row in range(3):
                if (col, row) != (1, 1):
                    assert carver.energy_at(col, row) == BORDER_ENERGY
        assert carver.energy_at(1, 1) == 0.0

        carver.remove_vertical_seam(carver.find_vertical_seam())
        assert (carver.width(), carver.height()) == (2, 3)
        carver.remove_vertical_seam(carver.find_vertical_seam())
        assert (carver.width(), carver.height()) == (1, 3)
        carver.remove_horizontal_seam(carver.find_horizontal_seam())
        carver.remove_horizontal_seam(carver.find_horizontal_seam())
        assert (carver.width(), carver.height()) == (1, 1)
        assert torch.equal(carver.image(), make_uniform_image(1, 1))

    def test_uniform_three_by_three_horizontal_first(self):
        carver = SeamCarver(make_uniform_image(3, 3))
        carver.remove_horizontal_seam(carver.find_horizontal_seam())
        assert (carver.width(), carver.height()) == (3, 2)

    def test_removes_exactly_the_seam_pixels(self):
        """The pixels that disappear are exactly the ones the seam names."""
        carver = SeamCarver(make_unique_image(8, 8))
        before = carver.image()
        seam = carver.find_vertical_seam()
        carver.remove_vertical_seam(seam)
        removed = {tuple(before[:, row, seam[row]].tolist()) for row in range(8)}
        remaining = set(map(tuple, carver.image().reshape(3, -1).t().tolist()))
        assert removed.isdisjoint(remaining)
        assert len(remaining) == 8 * 7

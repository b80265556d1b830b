"""Shared test fixtures for the seamcarver test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import torch
import pytest


def make_random_image(H, W, seed=0):
    """Random RGB uint8 image (3, H, W)."""
    generator = torch.Generator().manual_seed(seed)
    return torch.randint(0, 256, (3, H, W), dtype=torch.uint8, generator=generator)


def make_unique_image(H, W):
    """RGB image where every pixel has a distinct color (pixel index in base 256)."""
    idx = torch.arange(H * W, dtype=torch.long).reshape(H, W)
    return torch.stack([idx // 65536, (idx // 256) % 256, idx % 256]).to(torch.uint8)


def make_uniform_image(H, W, color=(120, 80, 40)):
    """Solid-color RGB image."""
    return torch.tensor(color, dtype=torch.uint8).view(3, 1, 1).expand(3, H, W).clone()


def pixel_colors(image):
    """Set of (r, g, b) tuples present in a (3, H, W) image."""
    return set(map(tuple, image.reshape(3, -1).t().tolist()))


@pytest.fixture
def random_image():
    """Random 10-wide, 12-tall image."""
    return make_random_image(12, 10, seed=42)


@pytest.fixture
def unique_image():
    """10-wide, 12-tall image with one distinct color per pixel."""
    return make_unique_image(12, 10)

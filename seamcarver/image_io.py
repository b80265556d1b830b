"""
Conversion between files, PIL images, numpy arrays and (3, H, W) uint8 tensors.
"""

import numpy as np
import torch
from PIL import Image


def _from_hwc_array(array: np.ndarray) -> torch.Tensor:
    if array.ndim == 2:
        array = np.repeat(array[:, :, None], 3, axis=2)
    if array.ndim != 3 or array.shape[2] != 3:
        raise ValueError(f"Expected an (H, W, 3) or (H, W) array, got shape {array.shape}")
    return torch.from_numpy(np.ascontiguousarray(array)).permute(2, 0, 1)


def to_image_tensor(image) -> torch.Tensor:
    """
    Convert an image to a fresh RGB tensor (3, H, W) of dtype uint8.

    Accepts a PIL image (any mode, converted to RGB), a numpy array
    (H, W, 3) or grayscale (H, W), or a tensor (3, H, W) / (H, W).
    Floating point data is assumed to be in [0, 1].
    """
    if image is None:
        raise ValueError("Image must not be None")

    if isinstance(image, Image.Image):
        tensor = _from_hwc_array(np.array(image.convert('RGB')))
    elif isinstance(image, np.ndarray):
        tensor = _from_hwc_array(image)
    elif isinstance(image, torch.Tensor):
        tensor = image.detach().cpu()
        if tensor.dim() == 2:
            tensor = tensor.unsqueeze(0).expand(3, -1, -1)
        if tensor.dim() != 3 or tensor.shape[0] != 3:
            raise ValueError(f"Expected a (3, H, W) tensor, got shape {tuple(tensor.shape)}")
    else:
        raise ValueError(f"Unsupported image type: {type(image).__name__}")

    if tensor.shape[1] == 0 or tensor.shape[2] == 0:
        raise ValueError(f"Image must be at least 1x1, got shape {tuple(tensor.shape)}")

    if tensor.is_floating_point():
        tensor = (tensor * 255).round().clamp(0, 255)
    elif tensor.dtype != torch.uint8:
        tensor = tensor.clamp(0, 255)

    return tensor.to(torch.uint8).clone(memory_format=torch.contiguous_format)


def to_pil_image(tensor: torch.Tensor) -> Image.Image:
    """Convert a (3, H, W) uint8 tensor to a PIL RGB image."""
    array = to_image_tensor(tensor).permute(1, 2, 0).numpy()
    return Image.fromarray(np.ascontiguousarray(array))


def load_image(path) -> torch.Tensor:
    """Load an image file as a (3, H, W) uint8 tensor."""
    with Image.open(path) as img:
        return to_image_tensor(img)


def save_image(tensor: torch.Tensor, path):
    """Save a (3, H, W) tensor as an image file; the format follows the extension."""
    to_pil_image(tensor).save(path)

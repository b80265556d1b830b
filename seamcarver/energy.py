"""
Energy functions for seam carving.

The energy function determines which pixels are "important".
Low-energy seams are preferred for removal.

We use the dual-gradient energy: for an interior pixel (x, y),

    E(x, y) = sqrt(Δx² + Δy²)

where Δx² is the squared RGB distance between the pixels at (x+1, y) and
(x-1, y), and Δy² the squared RGB distance between (x, y+1) and (x, y-1).
The function looks only at the four neighbours, so it is undefined on the
image border. Border pixels get a fixed sentinel instead.
"""

import torch


# Above the largest interior value for 8-bit RGB, sqrt(6) * 255 ≈ 624.6
BORDER_ENERGY = 1000.0


def _squared_color_distance(a: torch.Tensor, b: torch.Tensor) -> torch.Tensor:
    """Sum over channels of (a - b)², computed in int64 so uint8 cannot wrap."""
    diff = a.to(torch.int64) - b.to(torch.int64)
    return (diff * diff).sum(dim=0)


def dual_gradient_energy(image: torch.Tensor,
                         border_energy: float = BORDER_ENERGY) -> torch.Tensor:
    """
    Compute the dual-gradient energy of every pixel.

    Args:
        image: RGB image tensor (C, H, W)
        border_energy: Value assigned to every pixel on the outer border

    Returns:
        Energy map (H, W), float64
    """
    if image.dim() != 3:
        raise ValueError(f"Expected a (C, H, W) image, got shape {tuple(image.shape)}")

    _, H, W = image.shape
    energy = torch.full((H, W), float(border_energy), dtype=torch.float64)

    # Images narrower or shorter than 3 pixels are all border
    if H < 3 or W < 3:
        return energy

    dx = _squared_color_distance(image[:, 1:-1, 2:], image[:, 1:-1, :-2])
    dy = _squared_color_distance(image[:, 2:, 1:-1], image[:, :-2, 1:-1])
    energy[1:-1, 1:-1] = torch.sqrt((dx + dy).to(torch.float64))

    return energy

"""
Inspection helpers: printable energy tables and seam overlays.
"""

from typing import Optional, Tuple

import torch
from matplotlib.figure import Figure

from .carver import SeamCarver
from .seam import SeamLike, check_direction


def _seam_mask(seam: SeamLike, H: int, W: int, direction: str) -> torch.Tensor:
    """Boolean (H, W) mask that is True on the seam pixels."""
    check_direction(direction)
    seam = torch.as_tensor(seam, dtype=torch.long)
    mask = torch.zeros(H, W, dtype=torch.bool)
    if direction == 'vertical':
        mask[torch.arange(H), seam] = True
    else:
        mask[seam, torch.arange(W)] = True
    return mask


def format_energy_table(carver: SeamCarver, seam: SeamLike,
                        direction: str = 'vertical') -> str:
    """
    Render every pixel's energy, marking seam pixels with '*'.

    The last line is the sum of the marked energies.
    """
    H, W = carver.height(), carver.width()
    mask = _seam_mask(seam, H, W, direction)

    lines = []
    total = 0.0
    for row in range(H):
        cells = []
        for col in range(W):
            energy = carver.energy_at(col, row)
            marker = " "
            if mask[row, col]:
                marker = "*"
                total += energy
            cells.append(f"{energy:7.2f}{marker} ")
        lines.append("".join(cells))

    lines.append(f"Total energy = {total:f}")
    return "\n".join(lines)


def visualize_seam(image: torch.Tensor, seam: SeamLike,
                   direction: str = 'vertical',
                   color: Tuple[int, int, int] = (255, 0, 0)) -> torch.Tensor:
    """Return a copy of a (3, H, W) image with the seam painted in ``color``."""
    _, H, W = image.shape
    mask = _seam_mask(seam, H, W, direction)

    img_vis = image.clone()
    fill = torch.tensor(color, dtype=image.dtype).unsqueeze(1)
    img_vis[:, mask] = fill
    return img_vis


def save_energy_plot(carver: SeamCarver, path,
                     seam: Optional[SeamLike] = None,
                     direction: str = 'vertical'):
    """Save a heatmap of the carver's energy, with an optional seam overlay."""
    check_direction(direction)
    energy = carver.energy().numpy()
    H, W = energy.shape

    # Standalone figure: no pyplot state, no global backend switch
    fig = Figure(figsize=(min(12, max(4, W / 10)), min(9, max(3, H / 10))))
    ax = fig.subplots()
    im = ax.imshow(energy, cmap='inferno', interpolation='nearest')
    fig.colorbar(im, ax=ax, label='energy')

    if seam is not None:
        seam = torch.as_tensor(seam, dtype=torch.long).tolist()
        if direction == 'vertical':
            ax.plot(seam, range(H), color='cyan', linewidth=1.5)
        else:
            ax.plot(range(W), seam, color='cyan', linewidth=1.5)

    ax.set_title(f"Dual-gradient energy ({W}x{H})")
    ax.set_xlabel('column')
    ax.set_ylabel('row')
    fig.tight_layout()
    fig.savefig(path, dpi=100)

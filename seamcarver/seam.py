"""
Seam computation and removal.

The image is treated as a DAG: pixel (c, r) has edges to (c-1, r+1),
(c, r+1) and (c+1, r+1) when those lie inside the image. Rows are a
topological order, so a single top-to-bottom relaxation pass gives exact
shortest paths without a priority queue.

A path's cost is the sum of the energies of the pixels it enters; the row-0
pixel it starts from costs nothing.

Horizontal seams run the same search on the transposed energy map.
"""

import torch
from typing import Sequence, Tuple, Union

SeamLike = Union[torch.Tensor, Sequence[int]]

DIRECTIONS = ('vertical', 'horizontal')


def check_direction(direction: str):
    """Raise ValueError unless direction is 'vertical' or 'horizontal'."""
    if direction not in DIRECTIONS:
        raise ValueError(f"Invalid direction: {direction}")


def shortest_paths(energy: torch.Tensor) -> Tuple[torch.Tensor, torch.Tensor]:
    """
    Relax the pixel DAG row by row.

    For every target pixel the three candidate sources in the row above are
    compared left to right with a strict "<", so on ties the leftmost source
    becomes the predecessor.

    Args:
        energy: Energy map (H, W)

    Returns:
        distance_to: (H, W) float64, shortest distance from row 0
        edge_to: (H, W) int64, flat index (row * W + col) of the predecessor,
                 -1 for row 0
    """
    H, W = energy.shape
    energy = energy.to(torch.float64)

    distance_to = torch.full((H, W), float('inf'), dtype=torch.float64)
    edge_to = torch.full((H, W), -1, dtype=torch.long)
    distance_to[0] = 0.0

    cols = torch.arange(W, dtype=torch.long)

    for row in range(H - 1):
        prev = distance_to[row]

        # candidates[k, t] is the distance of source column t + k - 1
        candidates = torch.full((3, W), float('inf'), dtype=torch.float64)
        candidates[0, 1:] = prev[:-1]
        candidates[1] = prev
        candidates[2, :-1] = prev[1:]

        # Compare the relaxed sums, not the raw source distances: sources
        # that differ only below float precision must tie
        candidates = candidates + energy[row + 1]

        # argmin returns the first minimum, i.e. the leftmost source
        offset = torch.argmin(candidates, dim=0)
        best = candidates.gather(0, offset.unsqueeze(0)).squeeze(0)

        distance_to[row + 1] = best
        edge_to[row + 1] = row * W + cols + offset - 1

    return distance_to, edge_to


def dp_seam(energy: torch.Tensor, direction: str = 'vertical') -> torch.Tensor:
    """
    Compute the globally minimum-energy seam by dynamic programming.

    Args:
        energy: Energy map (H, W)
        direction: 'vertical' or 'horizontal'

    Returns:
        Seam indices - for vertical: (H,) with column index per row
                      for horizontal: (W,) with row index per column
    """
    check_direction(direction)
    if energy.dim() != 2 or energy.numel() == 0:
        raise ValueError(f"Expected a non-empty (H, W) energy map, got shape {tuple(energy.shape)}")

    if direction == 'horizontal':
        return dp_seam(energy.t(), direction='vertical')

    H, W = energy.shape
    distance_to, edge_to = shortest_paths(energy)

    # Leftmost minimum of the last row
    end_col = torch.argmin(distance_to[H - 1]).item()

    seam = torch.empty(H, dtype=torch.long)
    pixel = (H - 1) * W + end_col
    while pixel >= 0:
        row, col = divmod(pixel, W)
        seam[row] = col
        pixel = edge_to[row, col].item()

    return seam


def seam_energy(energy: torch.Tensor, seam: SeamLike,
                direction: str = 'vertical') -> float:
    """Total path cost of a seam: the energies of every pixel after the first."""
    check_direction(direction)
    if direction == 'horizontal':
        energy = energy.t()

    seam = torch.as_tensor(seam, dtype=torch.long)
    rows = torch.arange(1, energy.shape[0])
    return energy[rows, seam[1:]].sum().item()


def validate_seam(seam: SeamLike, length: int, limit: int) -> torch.Tensor:
    """
    Check that a seam can be removed and return it as a long tensor.

    Args:
        seam: Seam indices
        length: Required number of entries (height for vertical seams)
        limit: Entries must lie in [0, limit) (width for vertical seams)

    Raises:
        ValueError: if the seam is missing, has the wrong length, leaves the
                    image or is not connected
    """
    if seam is None:
        raise ValueError("Seam must not be None")

    seam = torch.as_tensor(seam)
    if seam.is_floating_point() or seam.dtype == torch.bool:
        raise ValueError(f"Seam entries must be integers, got {seam.dtype}")
    seam = seam.to(torch.long)

    if seam.dim() != 1:
        raise ValueError(f"Seam must be one-dimensional, got shape {tuple(seam.shape)}")
    if seam.numel() != length:
        raise ValueError(f"Seam length {seam.numel()} does not match expected length {length}")
    if length > 0 and (seam.min() < 0 or seam.max() >= limit):
        raise ValueError(f"Seam entries must be in [0, {limit})")
    if length > 1 and (seam[1:] - seam[:-1]).abs().max() > 1:
        raise ValueError("Adjacent seam entries must differ by at most 1")

    return seam


def remove_seam(image: torch.Tensor, seam: SeamLike,
                direction: str = 'vertical') -> torch.Tensor:
    """
    Remove a seam from an image.

    The input is left untouched; a new, contiguous tensor is returned.

    Args:
        image: Image tensor (C, H, W) or (H, W)
        seam: Seam indices
        direction: 'vertical' or 'horizontal'

    Returns:
        Carved image with one row/column removed
    """
    check_direction(direction)

    if image.dim() == 2:
        # Grayscale or energy map
        image = image.unsqueeze(0)
        squeeze_output = True
    else:
        squeeze_output = False

    if direction == 'horizontal':
        carved = remove_seam(image.transpose(1, 2), seam, direction='vertical')
        carved = carved.transpose(1, 2).contiguous()
    else:
        C, H, W = image.shape
        if W <= 1:
            raise ValueError("Cannot remove a seam along a dimension of size 1")
        seam = validate_seam(seam, H, W)

        keep = torch.ones(H, W, dtype=torch.bool)
        keep[torch.arange(H), seam] = False
        # Boolean indexing walks the mask in row-major order, so each row
        # keeps its remaining pixels left to right.
        carved = image[:, keep].reshape(C, H, W - 1)

    if squeeze_output:
        carved = carved.squeeze(0)

    return carved

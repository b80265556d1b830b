"""
Content-aware image resizing by seam carving.

Energies use the dual-gradient function; minimum seams are found by a single
dynamic-programming pass over the pixel DAG.
"""

__version__ = "0.1.0"

from .energy import BORDER_ENERGY, dual_gradient_energy
from .seam import dp_seam, shortest_paths, seam_energy, validate_seam, remove_seam
from .carver import SeamCarver
from .carving import resize, resize_file
from .image_io import to_image_tensor, to_pil_image, load_image, save_image

__all__ = [
    'BORDER_ENERGY',
    'dual_gradient_energy',
    'dp_seam',
    'shortest_paths',
    'seam_energy',
    'validate_seam',
    'remove_seam',
    'SeamCarver',
    'resize',
    'resize_file',
    'to_image_tensor',
    'to_pil_image',
    'load_image',
    'save_image',
]

"""
Basic seam carving example.

Prints the dual-gradient energy table with the minimum vertical and
horizontal seams, saves the image with both seams drawn on it, then
shrinks the image and saves the result.

    python basic_seam_carving.py path/to/image.png --width 4 --height 5

Without an image path a small synthetic picture is used.
"""

import argparse
import sys
sys.path.insert(0, '..')

import torch
import matplotlib.pyplot as plt
from pathlib import Path

from seamcarver.carver import SeamCarver
from seamcarver.carving import resize
from seamcarver.diagnostics import format_energy_table, visualize_seam
from seamcarver.image_io import load_image, save_image


def make_synthetic_image(H=12, W=10):
    """Dark background with a bright, noisy disc slightly off center."""
    torch.manual_seed(0)
    ys = torch.arange(H).view(H, 1).float()
    xs = torch.arange(W).view(1, W).float()
    disc = ((ys - H * 0.4) ** 2 + (xs - W * 0.6) ** 2) <= (min(H, W) * 0.3) ** 2
    image = torch.full((3, H, W), 30, dtype=torch.uint8)
    noise = torch.randint(150, 256, (3, H, W), dtype=torch.uint8)
    image[:, disc] = noise[:, disc]
    return image


def main():
    parser = argparse.ArgumentParser(description='Basic seam carving demo')
    parser.add_argument('image', nargs='?', default=None, help='Input image path')
    parser.add_argument('--width', type=int, default=4, help='Target width')
    parser.add_argument('--height', type=int, default=5, help='Target height')
    parser.add_argument('--output-dir', default='../output', help='Where to save results')
    args = parser.parse_args()

    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    if args.image:
        print(f"Loading {args.image}...")
        image = load_image(args.image)
    else:
        print("Using synthetic image...")
        image = make_synthetic_image()

    carver = SeamCarver(image)
    print(f"Image size: {carver.width()}-by-{carver.height()}")
    print()
    print("The table gives the dual-gradient energies of each pixel.")
    print("The asterisks denote a minimum energy vertical or horizontal seam.")
    print()

    vertical_seam = carver.find_vertical_seam()
    print(f"Vertical seam: {vertical_seam.tolist()}")
    print(format_energy_table(carver, vertical_seam, direction='vertical'))
    print()

    horizontal_seam = carver.find_horizontal_seam()
    print(f"Horizontal seam: {horizontal_seam.tolist()}")
    print(format_energy_table(carver, horizontal_seam, direction='horizontal'))
    print()

    img_with_seams = visualize_seam(image, vertical_seam, direction='vertical')
    img_with_seams = visualize_seam(img_with_seams, horizontal_seam,
                                    direction='horizontal', color=(0, 255, 255))

    # Side-by-side view: seams on the original, and the carved result
    print(f"Resizing to {args.width}-by-{args.height}...")
    carved = resize(image, args.width, args.height)
    save_image(carved, output_dir / 'carved.png')

    fig, axes = plt.subplots(1, 2, figsize=(8, 4))
    axes[0].imshow(img_with_seams.permute(1, 2, 0).numpy(), interpolation='nearest')
    axes[0].set_title('Minimum seams')
    axes[1].imshow(carved.permute(1, 2, 0).numpy(), interpolation='nearest')
    axes[1].set_title(f'Carved to {args.width}x{args.height}')
    for ax in axes:
        ax.axis('off')
    fig.tight_layout()
    fig.savefig(output_dir / 'seams_and_carved.png', dpi=100)
    plt.close(fig)

    print(f"Saved: {output_dir / 'carved.png'}")
    print(f"Saved: {output_dir / 'seams_and_carved.png'}")


if __name__ == '__main__':
    main()

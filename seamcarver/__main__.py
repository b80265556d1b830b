"""
Command-line interface.

    python -m seamcarver resize input.png output.png --width 200 --height 150
    python -m seamcarver inspect input.png --plot energy.png
"""

import argparse
import logging
import sys

from .carver import SeamCarver
from .carving import resize_file
from .diagnostics import format_energy_table, save_energy_plot
from .energy import BORDER_ENERGY
from .image_io import load_image


def build_parser():
    parser = argparse.ArgumentParser(
        prog='seamcarver',
        description='Content-aware image shrinking by seam carving')
    parser.add_argument(
        '-v', '--verbose', action='count', default=0,
        help='Increase log output (-v for info, -vv for debug)')

    subparsers = parser.add_subparsers(dest='command', required=True)

    resize_parser = subparsers.add_parser(
        'resize', help='Shrink an image file to a target size')
    resize_parser.add_argument('input', help='Input image path')
    resize_parser.add_argument('output', help='Output image path')
    resize_parser.add_argument(
        '--width', type=int, required=True,
        help='Target width, smaller than the input width')
    resize_parser.add_argument(
        '--height', type=int, required=True,
        help='Target height, smaller than the input height')
    resize_parser.add_argument(
        '--border-energy', type=float, default=BORDER_ENERGY,
        help=f'Energy of border pixels (default: {BORDER_ENERGY})')

    inspect_parser = subparsers.add_parser(
        'inspect', help='Print energies and minimum seams of an image')
    inspect_parser.add_argument('input', help='Input image path')
    inspect_parser.add_argument(
        '--border-energy', type=float, default=BORDER_ENERGY,
        help=f'Energy of border pixels (default: {BORDER_ENERGY})')
    inspect_parser.add_argument(
        '--plot', default=None,
        help='Also save an energy heatmap with the vertical seam to this path')

    return parser


def run_resize(args):
    carved = resize_file(args.input, args.output, args.width, args.height,
                         border_energy=args.border_energy)
    print(f"Saved {args.output} ({carved.shape[2]}x{carved.shape[1]})")


def run_inspect(args):
    carver = SeamCarver(load_image(args.input), border_energy=args.border_energy)
    print(f"{args.input} ({carver.width()}-by-{carver.height()} image)")
    print()

    vertical_seam = carver.find_vertical_seam()
    print("Vertical seam: { " + " ".join(str(c) for c in vertical_seam.tolist()) + " }")
    print(format_energy_table(carver, vertical_seam, direction='vertical'))
    print()

    horizontal_seam = carver.find_horizontal_seam()
    print("Horizontal seam: { " + " ".join(str(r) for r in horizontal_seam.tolist()) + " }")
    print(format_energy_table(carver, horizontal_seam, direction='horizontal'))

    if args.plot:
        save_energy_plot(carver, args.plot, seam=vertical_seam, direction='vertical')
        print(f"\nSaved energy plot: {args.plot}")


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level,
                        format='%(asctime)s - %(name)-20s - %(levelname)-8s - %(message)s',
                        datefmt='%H:%M:%S')

    try:
        if args.command == 'resize':
            run_resize(args)
        else:
            run_inspect(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())

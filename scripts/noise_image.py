#!/usr/bin/env python3
"""Render generator output as a greyscale noise image.

Every pixel is one ``U8`` sample, filled row by row. Visible stripes,
gradients or repeated blocks point at structure in the output. The seed and
size are embedded in a PNG tEXt chunk so an image can be traced back to the
run that made it.

Usage (from the repo root):
    python scripts/noise_image.py out.png                   # 512x512, default seed
    python scripts/noise_image.py out.png --seed 0 -W 1024 -H 256
"""

import argparse
import json
import sys
from pathlib import Path

import numpy as np
from PIL import Image
from PIL.PngImagePlugin import PngInfo

# Add the repo root to path
SCRIPT_DIR = Path(__file__).resolve().parent
ROOT_DIR = SCRIPT_DIR.parent
sys.path.insert(0, str(ROOT_DIR))

from sungod.ra import DEFAULT_RANDOM_SEED, Ra  # noqa: E402
from sungod.sample import U8  # noqa: E402

METADATA_KEY = "sungod_noise"


def render_noise(seed: int, width: int, height: int) -> Image.Image:
    """Return a ``width`` x ``height`` greyscale image of ``U8`` samples."""
    if width <= 0 or height <= 0:
        raise ValueError(f"Image size must be positive, got {width}x{height}")
    ra = Ra(seed)
    count = width * height
    pixels = np.fromiter(
        (ra.sample(U8) for _ in range(count)), dtype=np.uint8, count=count
    )
    return Image.fromarray(pixels.reshape(height, width))


def save_noise_png(img: Image.Image, seed: int, path: str) -> None:
    """Save the image with its seed and size embedded as a PNG tEXt chunk."""
    info = PngInfo()
    info.add_text(
        METADATA_KEY,
        json.dumps({"seed": seed, "width": img.width, "height": img.height}),
    )
    img.save(path, pnginfo=info)


def main():
    parser = argparse.ArgumentParser(description="Render a noise image")
    parser.add_argument("output", help="Output PNG path")
    parser.add_argument(
        "--seed",
        type=lambda s: int(s, 0),
        default=DEFAULT_RANDOM_SEED,
        help="Generator seed, decimal or 0x-prefixed (default: 0xCAFEBABEDEADBEEF)",
    )
    parser.add_argument(
        "-W", "--width", type=int, default=512, help="Width (default: 512)"
    )
    parser.add_argument(
        "-H", "--height", type=int, default=512, help="Height (default: 512)"
    )
    args = parser.parse_args()

    try:
        img = render_noise(args.seed, args.width, args.height)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    save_noise_png(img, args.seed, args.output)
    print(f"Wrote {args.width}x{args.height} noise image to {args.output}")


if __name__ == "__main__":
    main()

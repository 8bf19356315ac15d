#!/usr/bin/env python3
"""
Animate image files from the command line with Veo, one at a time.

Uses the same batch driver as the Streamlit app. The API key comes from
GEMINI_API_KEY / GOOGLE_GENAI_API_KEY (a .env file is honoured).
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from modules.batch import run_batch, validate_batch_inputs, video_file_name  # noqa: E402
from modules.config import ASPECT_RATIOS, DEFAULT_ASPECT_RATIO  # noqa: E402
from modules.gemini_client import get_api_key  # noqa: E402
from modules.utils import image_file_from_path  # noqa: E402


def _fail(msg: str) -> int:
    print(f"ERROR: {msg}", file=sys.stderr)
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Animate images into short videos with Veo",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/animate_images.py -p "slow zoom into the mountains" photo.jpg
  python scripts/animate_images.py -p "leaves blowing" -a 9:16 -o out/ a.png b.png
        """
    )
    parser.add_argument("images", nargs="+", help="Image files to animate")
    parser.add_argument("-p", "--prompt", required=True, help="Describe the animation")
    parser.add_argument(
        "-a", "--aspect-ratio",
        default=DEFAULT_ASPECT_RATIO,
        choices=ASPECT_RATIOS,
        help=f"Video aspect ratio (default: {DEFAULT_ASPECT_RATIO})"
    )
    parser.add_argument("-o", "--out", default=".", help="Output directory (default: current)")
    return parser


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    args = build_parser().parse_args(argv)

    paths = [Path(p) for p in args.images]
    missing = [str(p) for p in paths if not p.is_file()]
    if missing:
        return _fail(f"Image not found: {', '.join(missing)}")

    try:
        images = [image_file_from_path(p) for p in paths]
    except ValueError as exc:
        return _fail(str(exc))
    api_key = get_api_key()
    problem = validate_batch_inputs(api_key, images, args.prompt)
    if problem:
        return _fail(problem)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    results = run_batch(
        api_key,
        images,
        args.prompt,
        args.aspect_ratio,
        on_progress=print,
    )

    failures = 0
    for result in results:
        if result.ok:
            target = out_dir / video_file_name(result.file_name)
            target.write_bytes(result.video)
            print(f"OK: {result.file_name} -> {target}")
        else:
            failures += 1
            print(f"FAILED: {result.file_name}: {result.error}", file=sys.stderr)

    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())

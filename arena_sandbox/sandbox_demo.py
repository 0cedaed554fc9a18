"""Small demonstration harness for the arena layout generator."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from .config import resolve_seed
from .errors import GenerationError
from .layout import generate_layout_with_retries
from .settings import load_layout_settings

LOGGER = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    # //1.- Describe the knobs a developer tweaks while iterating on layouts.
    parser = argparse.ArgumentParser(description="Generate an arena layout and log its summary")
    parser.add_argument("--seed", type=int, default=None, help="Layout seed (default: $ARENA_SEED or 42)")
    parser.add_argument("--config-dir", default=None, help="Directory holding the layout JSON files")
    parser.add_argument("--attempts", type=int, default=5, help="Seeds to try before giving up")
    parser.add_argument("--verbose", action="store_true", help="Log every generation phase")
    return parser


def run(args: Sequence[str] | None = None) -> int:
    # //2.- Parse arguments, configure logging and generate one layout.
    parsed = create_parser().parse_args(args)
    logging.basicConfig(
        level=logging.DEBUG if parsed.verbose else logging.INFO,
        format="[%(asctime)s] %(levelname)s %(message)s",
    )
    seed = resolve_seed(parsed.seed)
    settings = load_layout_settings(parsed.config_dir)
    try:
        layout = generate_layout_with_retries(seed, parsed.attempts, settings)
    except GenerationError as exc:
        LOGGER.error("No usable layout after %d attempts from seed %d: %s", parsed.attempts, seed, exc)
        return 1

    # //3.- Report what a rasterizer would receive.
    for line in layout.summary().splitlines():
        LOGGER.info(line)
    kinds: dict[str, int] = {}
    for polyline in layout.polylines():
        kinds[polyline.kind] = kinds.get(polyline.kind, 0) + 1
    LOGGER.info("polylines: %s", ", ".join(f"{kind}={count}" for kind, count in kinds.items()))
    return 0


if __name__ == "__main__":  # pragma: no cover - exercised by manual runs
    sys.exit(run())

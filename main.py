"""
Treegen - Procedural L-system Tree Demo

Generates one tree from a named preset and prints its statistics:
1. generate_sentence - Stochastic rewriting of the preset's axiom
2. interpret_sentence - 3D turtle walk into a skeleton
3. build_branch_geometry / build_leaf_instances - Mesh buffers

The same preset and seed always give the same tree, so a seed can be shared
to reproduce a result exactly.
"""

import argparse

from treegen.config import TreeConfig
from treegen.pipeline import generate
from treegen.presets import all_presets, preset_names
from treegen.visualization import save_skeleton_preview


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate a procedural L-system tree.")
    parser.add_argument(
        "--preset",
        default="Oak",
        help=f"Tree preset, one of {', '.join(preset_names())} (default: Oak)",
    )
    parser.add_argument("--seed", default="default-tree", help="Seed string")
    parser.add_argument(
        "--iterations",
        type=int,
        default=None,
        help="Rewriting generations (default: the preset's suggestion)",
    )
    parser.add_argument(
        "--preview",
        metavar="PATH",
        default=None,
        help="Save a front/side skeleton preview image to PATH",
    )
    parser.add_argument(
        "--list-presets",
        action="store_true",
        help="List the available presets and exit",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    if args.list_presets:
        for preset in all_presets():
            print(f"{preset.name:8s} ({preset.iterations} iterations)  {preset.description}")
        return

    try:
        config = TreeConfig.from_preset(args.preset, seed=args.seed, iterations=args.iterations)
    except (KeyError, ValueError) as e:
        raise SystemExit(f"error: {e}") from e

    print("\n" + "=" * 60)
    print(f"  TREEGEN: {args.preset} (seed {args.seed!r}, {config.iterations} iterations)")
    print("=" * 60)

    result = generate(config)
    result.print_summary()

    if args.preview:
        save_skeleton_preview(args.preview, result)


if __name__ == "__main__":
    main()

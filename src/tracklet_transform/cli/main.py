"""CLI main module with subcommands for transform, timebin, and inspect.

Usage:
    python -m tracklet_transform.cli transform --config run.yaml --input words.txt
    python -m tracklet_transform.cli timebin --config run.yaml --detector 0 -x -1.0
    python -m tracklet_transform.cli inspect --config run.yaml
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from ..core.config import load_config
from ..core.errors import TrackletTransformError
from ..core.logging import get_logger, setup_logging
from ..core.units import rad_to_deg
from ..tracklet import RawTracklet
from ..transformer import TrackletTransformer

logger = get_logger(__name__)

CLI_ERRORS = (OSError, ValueError, TrackletTransformError)


def read_words(path: Path) -> list[RawTracklet]:
    """Read one tracklet word per line, hexadecimal with 0x prefix or decimal.

    Blank lines and ``#`` comments are ignored.
    """
    tracklets = []
    with open(path, encoding="utf-8") as fh:
        for line in fh:
            text = line.split("#", 1)[0].strip()
            if text:
                tracklets.append(RawTracklet(int(text, 0)))
    return tracklets


def cmd_transform(args: argparse.Namespace) -> int:
    """Transform tracklet words and emit calibrated points as JSON."""
    try:
        transformer = TrackletTransformer.from_config(load_config(args.config))
        tracklets = read_words(args.input)
        logger.info("Transforming tracklets", {"count": len(tracklets)})

        results = []
        for tracklet in tracklets:
            calibrated = transformer.transform_tracklet(tracklet, args.tracking_frame)
            results.append({"detector": tracklet.detector, **calibrated.to_dict()})

        text = json.dumps(results, indent=2)
        if args.out is None:
            print(text)
        else:
            args.out.parent.mkdir(parents=True, exist_ok=True)
            args.out.write_text(text + "\n")
            print("Wrote", args.out)
        return 0
    except CLI_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_timebin(args: argparse.Namespace) -> int:
    """Print the timebin of a local x position."""
    try:
        transformer = TrackletTransformer.from_config(load_config(args.config))
        print(f"{transformer.get_timebin(args.detector, args.x):.6f}")
        return 0
    except CLI_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def cmd_inspect(args: argparse.Namespace) -> int:
    """Print cached constants and configured chambers."""
    try:
        config = load_config(args.config)
        transformer = TrackletTransformer.from_config(config)
        state = transformer.state

        print("Transformer:")
        print("-" * 40)
        print("  Decoding:      ", config.transformer.decoding.value)
        print("  t0 chamber:    ", config.transformer.t0_reference_chamber)
        print("  Shared pad:    ", config.transformer.shared_pad_correction)
        print()

        print("Reference planes [cm]:")
        print("-" * 40)
        print(f"  Cathode:        {state.x_cathode:.3f}")
        print(f"  Anode:          {state.x_anode:.3f}")
        print(f"  Drift:          {state.x_drift:.3f}")
        print()

        print("Chambers:")
        print("-" * 40)
        calibration = transformer.calibration
        for det in transformer.geometry.detectors:
            print(
                f"  {det:4d}  vdrift={calibration.vdrift(det):.4f} cm/us"
                f"  ExB={rad_to_deg(calibration.exb(det)):.3f} deg"
            )
        return 0
    except CLI_ERRORS as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tracklet_transform.cli",
        description="Tracklet calibration and transformation CLI",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", type=Path, default=None, help="JSON lines log file")

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # Transform subcommand
    parser_transform = subparsers.add_parser(
        "transform",
        help="Transform tracklet words into calibrated points",
    )
    parser_transform.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to YAML/JSON config file",
    )
    parser_transform.add_argument(
        "--input",
        "-i",
        type=Path,
        required=True,
        help="File with one tracklet word per line",
    )
    parser_transform.add_argument(
        "--tracking-frame",
        action="store_true",
        help="Output points in the tracking frame instead of the chamber frame",
    )
    parser_transform.add_argument(
        "--out",
        "-o",
        type=Path,
        default=None,
        help="Output JSON file (default: stdout)",
    )
    parser_transform.set_defaults(func=cmd_transform)

    # Timebin subcommand
    parser_timebin = subparsers.add_parser(
        "timebin",
        help="Convert a local x position into a timebin",
    )
    parser_timebin.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to YAML/JSON config file",
    )
    parser_timebin.add_argument("--detector", "-d", type=int, required=True, help="Chamber index")
    parser_timebin.add_argument("-x", type=float, required=True, help="Local x in cm")
    parser_timebin.set_defaults(func=cmd_timebin)

    # Inspect subcommand
    parser_inspect = subparsers.add_parser(
        "inspect",
        help="Print reference planes and chamber calibration",
    )
    parser_inspect.add_argument(
        "--config",
        "-c",
        type=Path,
        required=True,
        help="Path to YAML/JSON config file",
    )
    parser_inspect.set_defaults(func=cmd_inspect)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.log_file, logging.DEBUG if args.verbose else logging.WARNING)
    return int(args.func(args) or 0)


if __name__ == "__main__":
    sys.exit(main())

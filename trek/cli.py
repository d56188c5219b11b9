"""Command-line interface."""

import json
import random
import sys
from typing import Any, Dict, List, Tuple

from .config import load_settings
from .constants import (
    CONSTELLATION_TOLERANCE_DEGREES,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CANVAS_HEIGHT,
    POLYLINE_TOLERANCE_DEGREES,
)
from .exceptions import ConfigurationError, InvalidPathError, TrekError
from .geometry import simplify_path
from .logger import logger, set_debug_mode
from .placement import layout_constellations
from .polyline import decode_polyline, encode_polyline
from .projection import format_svg_points, project_path, select_star_indices
from .share import build_share_payload, format_run_summary, parse_share_payload
from .types import ProjectionResult
from .validation import ValidationContext, validate_path, validate_positive, validate_tolerance

VALUE_OPTIONS = {
    "--tolerance": float,
    "--width": float,
    "--height": float,
    "--seed": int,
    "--name": str,
    "--distance": float,
}
FLAG_OPTIONS = {"--svg", "--debug"}


def print_help():
    """Print comprehensive help message."""
    help_text = """
Trek Constellations
===================

Turn GPS run tracks into constellations: simplified outlines, canvas
coordinates, shareable encoded polylines and a galaxy layout.

USAGE:
    trek <command> [arguments] [OPTIONS]

COMMANDS:
    simplify <track.json>    Simplify a track, print the kept points
    project <track.json>     Project a track onto a drawing canvas
    encode <track.json>      Encode a track as a polyline string
    decode <polyline>        Decode a polyline string into points
    share <track.json>       Build a shareable run payload (needs --name, --distance)
    inspect <payload.json>   Decode a shared run payload and summarize it
    galaxy <count>           Lay out <count> constellations in the galaxy

TRACK FILES:
    JSON list of [lat, lng] pairs, or an object with a "coordinates" list.

OPTIONS:
    --tolerance DEG      Simplification tolerance in degrees
                         (default: 0.000215 for project, 0 for simplify)
    --width PX           Canvas width for project (default: 250)
    --height PX          Canvas height for project (default: 250)
    --svg                Include SVG points attribute and star indices (project)
    --name NAME          Run name (share)
    --distance MILES     Run distance in miles (share)
    --seed N             Random seed for a reproducible galaxy layout
    --debug              Enable debug output
    --help, -h           Show this help message

ENVIRONMENT:
    TREK_GALAXY_WIDTH, TREK_GALAXY_HEIGHT, TREK_GALAXY_PADDING,
    TREK_ITEM_WIDTH, TREK_ITEM_HEIGHT, TREK_SEED

EXAMPLES:
    trek project run.json --svg
    trek encode run.json
    trek decode '_p~iF~ps|U_ulLnnqC_mqNvxq`@'
    trek share run.json --name "Sunday long run" --distance 13.1
    trek galaxy 12 --seed 42
"""
    print(help_text)


def load_track(file_path: str) -> List[Tuple[float, float]]:
    """
    Load a track from a JSON file.

    Raises:
        InvalidPathError: If the file does not hold a list of [lat, lng] pairs
    """
    with open(file_path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise InvalidPathError(f"Track file {file_path} is not valid JSON: {e}") from e

    if isinstance(data, dict):
        if "coordinates" not in data:
            raise InvalidPathError(f"Track file {file_path} has no 'coordinates' list")
        data = data["coordinates"]

    validate_path(data)
    return [(float(lat), float(lng)) for lat, lng in data]


def parse_arguments(args: List[str]) -> Tuple[List[str], Dict[str, Any]]:
    """
    Split arguments into positionals and options.

    Exits with status 1 on unknown options or malformed values.
    """
    positionals: List[str] = []
    options: Dict[str, Any] = {}

    i = 0
    while i < len(args):
        arg = args[i]

        if arg in FLAG_OPTIONS:
            options[arg] = True
            i += 1
        elif arg in VALUE_OPTIONS:
            if i + 1 >= len(args):
                print(f"Error: {arg} requires a value")
                sys.exit(1)
            try:
                options[arg] = VALUE_OPTIONS[arg](args[i + 1])
            except ValueError:
                print(f"Error: invalid value for {arg}: {args[i + 1]}")
                sys.exit(1)
            i += 2
        elif arg.startswith("--"):
            logger.error(f"Unknown option: {arg}")
            sys.exit(1)
        else:
            positionals.append(arg)
            i += 1

    return positionals, options


def _require_argument(positionals: List[str], command: str, name: str) -> str:
    if len(positionals) != 1:
        print(f"Error: {command} expects exactly one {name}")
        sys.exit(1)
    return positionals[0]


def run_simplify(positionals, options):
    track = load_track(_require_argument(positionals, "simplify", "track file"))
    simplified = simplify_path(track, options.get("--tolerance", POLYLINE_TOLERANCE_DEGREES))
    logger.info(f"Kept {len(simplified)} of {len(track)} points")
    return [list(p) for p in simplified]


def run_project(positionals, options):
    track = load_track(_require_argument(positionals, "project", "track file"))
    width = options.get("--width", DEFAULT_CANVAS_WIDTH)
    height = options.get("--height", DEFAULT_CANVAS_HEIGHT)
    tolerance = options.get("--tolerance", CONSTELLATION_TOLERANCE_DEGREES)

    with ValidationContext("Checking projection options") as ctx:
        ctx.validate(width, lambda v: validate_positive(v, "width"), "--width")
        ctx.validate(height, lambda v: validate_positive(v, "height"), "--height")
        ctx.validate(tolerance, validate_tolerance, "--tolerance")

    points = project_path(track, width, height, tolerance)
    result: ProjectionResult = {
        "points": [list(p) for p in points],
        "width": width,
        "height": height,
        "original_points": len(track),
        "simplified_points": len(points),
    }
    if options.get("--svg"):
        result["svg_points"] = format_svg_points(points)
        result["stars"] = select_star_indices(len(points))
    return result


def run_encode(positionals, options):
    track = load_track(_require_argument(positionals, "encode", "track file"))
    return encode_polyline(track)


def run_decode(positionals, options):
    text = _require_argument(positionals, "decode", "polyline string")
    return [list(p) for p in decode_polyline(text)]


def run_share(positionals, options):
    track = load_track(_require_argument(positionals, "share", "track file"))
    if "--name" not in options or "--distance" not in options:
        raise ConfigurationError("share requires --name and --distance")
    return json.loads(build_share_payload(options["--name"], options["--distance"], track))


def run_inspect(positionals, options):
    file_path = _require_argument(positionals, "inspect", "payload file")
    with open(file_path, encoding="utf-8") as f:
        run = parse_share_payload(f.read())
    for line in format_run_summary(run):
        logger.info(line)
    return run


def run_galaxy(positionals, options):
    raw_count = _require_argument(positionals, "galaxy", "count")
    try:
        count = int(raw_count)
    except ValueError as e:
        raise ConfigurationError(
            f"count must be an integer, got {raw_count!r}", config_key="count"
        ) from e

    settings = load_settings()
    seed = options.get("--seed", settings.seed)
    boxes = layout_constellations(
        count,
        settings.canvas,
        settings.item_width,
        settings.item_height,
        rng=random.Random(seed),
    )
    return [box.to_dict() for box in boxes]


COMMANDS = {
    "simplify": run_simplify,
    "project": run_project,
    "encode": run_encode,
    "decode": run_decode,
    "share": run_share,
    "inspect": run_inspect,
    "galaxy": run_galaxy,
}


def main(argv=None):
    """Main CLI entry point."""
    args = sys.argv[1:] if argv is None else list(argv)

    if not args or "--help" in args or "-h" in args:
        print_help()
        sys.exit(0 if "--help" in args or "-h" in args else 1)

    command, rest = args[0], args[1:]
    if command not in COMMANDS:
        logger.error(f"Unknown command: {command}")
        sys.exit(1)

    positionals, options = parse_arguments(rest)
    if options.get("--debug"):
        set_debug_mode(True)

    try:
        result = COMMANDS[command](positionals, options)
    except (TrekError, OSError) as e:
        logger.error(str(e))
        sys.exit(1)

    print(json.dumps(result, indent=2))

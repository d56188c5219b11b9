#!/usr/bin/env python3
"""
Generate test track files with random run data.

Creates JSON track files shaped like real GPS runs around a few city
starting points. Useful for trying the CLI on many tracks and for checking
galaxy layouts with realistic constellation counts.

Features:
- Loop runs that return close to their start
- Out-and-back runs along a wandering line
- GPS jitter on every sample
- Optional share payloads (encoded polyline, name, distance) next to each track

Usage:
    scripts/generate_test_data.py 50 --output runs --payloads
    trek project runs/run_0001.json --svg
"""

import argparse
import json
import math
import random
from pathlib import Path

from trek.share import build_share_payload

# Starting points (lat, lng)
CITIES = {
    "San Francisco": (37.7694, -122.4862),
    "Boston": (42.3554, -71.0655),
    "London": (51.5073, -0.1657),
    "Berlin": (52.5145, 13.3501),
    "Sydney": (-33.8688, 151.2093),
}

# Rough size of one degree of latitude, only used to size generated runs
MILES_PER_DEGREE = 69.0


def generate_loop(start, num_points, radius_deg, rng):
    """Generate a closed loop with a wobbly radius around a centre east of start."""
    lat0, lng0 = start
    center_lng = lng0 + radius_deg
    coords = []
    for i in range(num_points):
        angle = math.pi + 2 * math.pi * i / (num_points - 1)
        wobble = 1 + 0.25 * math.sin(3 * angle) + rng.uniform(-0.03, 0.03)
        lat = lat0 + radius_deg * wobble * math.sin(angle)
        lng = center_lng + radius_deg * wobble * math.cos(angle)
        coords.append((lat, lng))
    return coords


def generate_out_and_back(start, num_points, length_deg, rng):
    """Generate a run that wanders away from start and retraces its steps."""
    lat, lng = start
    heading = rng.uniform(0, 2 * math.pi)
    step = 2 * length_deg / num_points
    outbound = [(lat, lng)]
    for _ in range(num_points // 2):
        heading += rng.uniform(-0.3, 0.3)
        lat += step * math.sin(heading)
        lng += step * math.cos(heading)
        outbound.append((lat, lng))
    return outbound + outbound[-2::-1]


def add_jitter(coords, rng, amount=0.00003):
    """Add GPS noise to every sample."""
    return [
        (round(lat + rng.uniform(-amount, amount), 6), round(lng + rng.uniform(-amount, amount), 6))
        for lat, lng in coords
    ]


def track_length_miles(coords):
    """Planar track length, good enough for labelling test data."""
    total = 0.0
    for (lat1, lng1), (lat2, lng2) in zip(coords, coords[1:]):
        total += math.hypot(lat2 - lat1, (lng2 - lng1) * math.cos(math.radians(lat1)))
    return total * MILES_PER_DEGREE


def main():
    """Generate test track files."""
    parser = argparse.ArgumentParser(
        description="Generate synthetic GPS run tracks as JSON",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Generate 20 tracks (default)
  %(prog)s

  # Generate 200 tracks with share payloads into a custom directory
  %(prog)s 200 --output many_runs --payloads

  # Reproducible output
  %(prog)s 20 --seed 7
        """,
    )
    parser.add_argument(
        "count",
        type=int,
        nargs="?",
        default=20,
        help="Number of tracks to generate (default: 20)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=str,
        help="Output directory (default: runs_<count>)",
    )
    parser.add_argument("--seed", type=int, help="Random seed")
    parser.add_argument(
        "--payloads",
        action="store_true",
        help="Also write share payloads (run_XXXX.share.json)",
    )
    args = parser.parse_args()

    rng = random.Random(args.seed)
    output_dir = Path(args.output or f"runs_{args.count}")
    output_dir.mkdir(exist_ok=True)

    print(f"Generating {args.count:,} tracks in {output_dir}/")

    for i in range(args.count):
        city, start = rng.choice(list(CITIES.items()))
        num_points = rng.randint(200, 2000)
        if rng.random() < 0.5:
            coords = generate_loop(start, num_points, rng.uniform(0.005, 0.03), rng)
            kind = "loop"
        else:
            coords = generate_out_and_back(start, num_points, rng.uniform(0.01, 0.05), rng)
            kind = "out and back"
        coords = add_jitter(coords, rng)

        track_file = output_dir / f"run_{i + 1:04d}.json"
        track_file.write_text(json.dumps({"coordinates": coords}))

        if args.payloads:
            name = f"{city} {kind} #{i + 1}"
            payload = build_share_payload(name, round(track_length_miles(coords), 2), coords)
            (output_dir / f"run_{i + 1:04d}.share.json").write_text(payload)

    print(f"\n✓ Successfully generated {args.count:,} tracks in {output_dir}/")
    print("\nTry them with:")
    print(f"  trek project {output_dir}/run_0001.json --svg")
    print(f"  trek galaxy {args.count} --seed 1")


if __name__ == "__main__":
    main()

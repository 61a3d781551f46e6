"""
Dump an MT19937 output sequence
Seeds a generator, optionally skips ahead, draws a block of values and saves
them together with the snapshot taken after the last draw
"""

import argparse
import os

import numpy as np
from tqdm import tqdm

from mt19937 import MT19937
from snapshot_io import save_snapshot

DEFAULT_COUNT = 624
DEFAULT_OUTPUT = os.path.join("data", "sequence.npz")
DEFAULT_SHOW = 10
BLOCK_SIZE = MT19937.N


def draw_sequence(rng, count, progress=True):
    """
    Draw count values in blocks of one state vector
    :param rng: generator to draw from
    :param count: number of values
    :param progress: show a tqdm progress bar
    :return: uint32 array of length count
    """
    blocks = []
    with tqdm(total=count, desc="Drawing values", unit="val", disable=not progress) as bar:
        remaining = count
        while remaining > 0:
            take = min(BLOCK_SIZE, remaining)
            blocks.append(rng.generate(take))
            bar.update(take)
            remaining -= take

    if not blocks:
        return np.empty(0, dtype=np.uint32)
    return np.concatenate(blocks)


def _non_negative(value):
    number = int(value, 0)
    if number < 0:
        raise argparse.ArgumentTypeError(f"Expected a non-negative integer, got {value}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(description="Dump a deterministic MT19937 output sequence")
    parser.add_argument(
        "--seed",
        type=lambda value: int(value, 0) & 0xFFFFFFFF,
        default=MT19937.DEFAULT_SEED,
        help="Generator seed (accepts decimal or 0x-prefixed hex)",
    )
    parser.add_argument("--skip", type=_non_negative, default=0, help="Values to discard before drawing")
    parser.add_argument("--count", type=_non_negative, default=DEFAULT_COUNT, help="Values to draw")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="Destination .npz for the drawn values")
    parser.add_argument("--state-out", default=None, help="Optional .npz for the snapshot after drawing")
    parser.add_argument("--show", type=_non_negative, default=DEFAULT_SHOW, help="Number of values to print")
    parser.add_argument("--no-progress", action="store_true", help="Disable the progress bar")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    print("=" * 60)
    print("MT19937 SEQUENCE DUMP")
    print("=" * 60)
    print(f"Seed:  {args.seed} (0x{args.seed:08X})")
    print(f"Skip:  {args.skip}")
    print(f"Count: {args.count}")

    rng = MT19937(args.seed)
    rng.advance(args.skip)
    start_position = rng.position

    values = draw_sequence(rng, args.count, progress=not args.no_progress)

    if args.show:
        print(f"\nFirst {min(args.show, len(values))} values:")
        for offset, value in enumerate(values[:args.show]):
            print(f"  {start_position + offset}: {int(value):010} (0x{int(value):08X})")

    directory = os.path.dirname(args.output)
    if directory:
        os.makedirs(directory, exist_ok=True)
    np.savez_compressed(
        args.output,
        values=values,
        seed=np.uint32(args.seed),
        skip=np.int64(args.skip),
        start_position=np.int64(start_position),
    )
    print(f"\nValues saved: {args.output} ({len(values)} values)")

    if args.state_out:
        save_snapshot(args.state_out, rng.save_state())
        print(f"Snapshot saved: {args.state_out} (position {rng.position})")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())

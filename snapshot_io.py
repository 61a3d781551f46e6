"""
Snapshot persistence
Stores generator snapshots as compressed .npz files (state, index, position)
"""

import os

import numpy as np

from rng import InvalidState, Snapshot

SNAPSHOT_FIELDS = ("state", "index", "position")


def save_snapshot(path, snapshot):
    """
    Write a snapshot to disk
    :param path: destination .npz file; parent directories are created
    :param snapshot: Snapshot to store
    :return: path written
    """
    directory = os.path.dirname(os.fspath(path))
    if directory:
        os.makedirs(directory, exist_ok=True)

    np.savez_compressed(
        path,
        state=np.asarray(snapshot.state, dtype=np.uint32),
        index=np.int64(snapshot.index),
        position=np.int64(snapshot.position),
    )
    return path


def load_snapshot(path):
    """
    Read a snapshot written by save_snapshot
    :param path: .npz file
    :return: Snapshot
    """
    with np.load(path) as data:
        missing = [name for name in SNAPSHOT_FIELDS if name not in data.files]
        if missing:
            raise InvalidState(f"Snapshot file {path} is missing {', '.join(missing)}")

        state = data["state"]
        if state.ndim != 1:
            raise InvalidState(f"Snapshot state must be one-dimensional, got shape {state.shape}")

        index = data["index"]
        position = data["position"]
        for name, value in (("index", index), ("position", position)):
            if value.ndim != 0 or value.dtype.kind not in "iu":
                raise InvalidState(
                    f"Snapshot {name} must be an integer scalar, got {value.dtype} shape {value.shape}")

        # words are range-checked by restore_state
        return Snapshot(state=state, index=int(index), position=int(position))

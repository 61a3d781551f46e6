"""Command-line dump tests."""

import numpy as np
import pytest

import dump_sequence
from mt19937 import MT19937
from snapshot_io import load_snapshot


def test_dump_values_and_snapshot(tmp_path, capsys):
    output = tmp_path / "out" / "sequence.npz"
    state_out = tmp_path / "state.npz"

    code = dump_sequence.main([
        "--seed", "0x11B9",
        "--skip", "100",
        "--count", "1500",
        "--output", str(output),
        "--state-out", str(state_out),
        "--show", "3",
        "--no-progress",
    ])
    assert code == 0

    expected = MT19937(4537)
    expected.advance(100)
    with np.load(output) as data:
        assert data["values"].tolist() == expected.generate(1500).tolist()
        assert int(data["seed"]) == 4537
        assert MT19937(data["seed"]).generate(5).tolist() == MT19937(4537).generate(5).tolist()
        assert int(data["skip"]) == 100
        assert int(data["start_position"]) == 100

    resumed = MT19937(seed=None)
    resumed.restore_state(load_snapshot(state_out))
    assert resumed.position == 1600
    assert resumed.generate(50).tolist() == expected.generate(50).tolist()

    printed = capsys.readouterr().out
    assert "100: " in printed
    assert "Snapshot saved" in printed


def test_default_seed(tmp_path):
    output = tmp_path / "sequence.npz"
    dump_sequence.main(["--count", "5", "--output", str(output), "--show", "0", "--no-progress"])
    with np.load(output) as data:
        assert data["values"].tolist() == MT19937().generate(5).tolist()


def test_draw_sequence_empty():
    values = dump_sequence.draw_sequence(MT19937(), 0, progress=False)
    assert values.shape == (0,)
    assert values.dtype == np.uint32


def test_rejects_negative_count():
    with pytest.raises(SystemExit):
        dump_sequence.build_parser().parse_args(["--count", "-3"])

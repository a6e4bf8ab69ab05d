from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from tracklet_transform.cli.main import main, read_words


def test_cli_help() -> None:
    out = subprocess.check_output([sys.executable, "-m", "tracklet_transform.cli", "--help"])
    text = out.decode()
    assert "transform" in text and "timebin" in text and "inspect" in text


def test_cli_missing_command() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "tracklet_transform.cli"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode != 0


def test_read_words(tmp_path: Path) -> None:
    path = tmp_path / "words.txt"
    path.write_text("# header\n0x10\n\n42  # decimal\n")

    assert [t.word for t in read_words(path)] == [16, 42]


def test_cli_transform(examples_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(
        [
            "transform",
            "-c",
            str(examples_dir / "nominal.yaml"),
            "-i",
            str(examples_dir / "tracklets.txt"),
        ]
    )
    assert rc == 0

    results = json.loads(capsys.readouterr().out)
    assert [r["detector"] for r in results] == [0, 3]
    assert results[0]["y"] == pytest.approx(0.635 * -63, rel=1e-6)
    assert results[0]["x"] == pytest.approx(2.55)


def test_cli_transform_tracking_frame(examples_dir: Path, tmp_path: Path) -> None:
    out = tmp_path / "out" / "points.json"
    rc = main(
        [
            "transform",
            "-c",
            str(examples_dir / "nominal.yaml"),
            "-i",
            str(examples_dir / "tracklets.txt"),
            "--tracking-frame",
            "-o",
            str(out),
        ]
    )
    assert rc == 0

    results = json.loads(out.read_text())
    assert results[0]["x"] == pytest.approx(302.55)
    assert results[1]["x"] == pytest.approx(337.5 + 2.55)


def test_cli_transform_unknown_detector(
    examples_dir: Path, tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    words = tmp_path / "words.txt"
    # hcid 40 -> detector 20, no matrix configured
    words.write_text(f"0x{40 << 49:016x}\n")

    rc = main(
        [
            "transform",
            "-c",
            str(examples_dir / "nominal.yaml"),
            "-i",
            str(words),
            "--tracking-frame",
        ]
    )
    assert rc == 1
    assert "detector 20" in capsys.readouterr().err


def test_cli_timebin(examples_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["timebin", "-c", str(examples_dir / "nominal.yaml"), "-d", "0", "-x", "0.2"])
    assert rc == 0
    assert float(capsys.readouterr().out) == pytest.approx(3.2)


def test_cli_inspect(examples_dir: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["inspect", "-c", str(examples_dir / "nominal.yaml")])
    assert rc == 0

    out = capsys.readouterr().out
    assert "direct" in out
    assert "Anode:          3.350" in out


def test_cli_missing_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    rc = main(["inspect", "-c", str(tmp_path / "missing.yaml")])
    assert rc == 1
    assert "Config file not found" in capsys.readouterr().err

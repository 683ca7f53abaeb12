from __future__ import annotations

from pathlib import Path

import pytest

from sorbetperf.config import AnalyzerSettings
from sorbetperf.errors import CheckerNotFoundError
from sorbetperf.runner import TIMEOUT_EXIT_CODE, run_checker


def test_run_checker_merges_stdout_and_stderr(tmp_path: Path, fake_checker) -> None:
    script = fake_checker(
        'echo "types.input.files 3"\n'
        'echo "types.input.methods 9" >&2\n'
        "exit 1\n"
    )
    run = run_checker(tmp_path, AnalyzerSettings(sorbet_bin=str(script)), echo=False)
    assert run.exit_code == 1
    assert run.timed_out is False
    assert run.duration_ms >= 0
    assert "types.input.files 3" in run.output
    assert "types.input.methods 9" in run.output


def test_run_checker_passes_counter_flags_and_path(tmp_path: Path, fake_checker) -> None:
    script = fake_checker('echo "$@"\n')
    run = run_checker(tmp_path, AnalyzerSettings(sorbet_bin=str(script)), echo=False)
    assert run.output.strip() == f"--counters --typed=strict --silence-dev-message {tmp_path}"
    assert run.command[0] == str(script)


def test_run_checker_echoes_output(tmp_path: Path, fake_checker, capsys) -> None:
    script = fake_checker('echo "types.input.files 3"\n')
    run_checker(tmp_path, AnalyzerSettings(sorbet_bin=str(script)), echo=True)
    assert "types.input.files 3" in capsys.readouterr().out


def test_run_checker_missing_binary(tmp_path: Path) -> None:
    settings = AnalyzerSettings(sorbet_bin=str(tmp_path / "no-such-sorbet"))
    with pytest.raises(CheckerNotFoundError, match="SORBET_BIN"):
        run_checker(tmp_path, settings, echo=False)


def test_run_checker_timeout(tmp_path: Path, fake_checker) -> None:
    script = fake_checker("exec sleep 5\n")
    settings = AnalyzerSettings(sorbet_bin=str(script), timeout_s=0.2)
    run = run_checker(tmp_path, settings, echo=False)
    assert run.timed_out is True
    assert run.exit_code == TIMEOUT_EXIT_CODE

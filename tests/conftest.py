from __future__ import annotations

from pathlib import Path

import pytest

COUNTERS_OUTPUT = """\
sorbet: typechecking project
app/models/user.rb:12: Method `foo` does not exist https://srb.help/7003
types.input.files 120
types.input.classes 300
types.input.modules 50
types.input.methods 20000
Errors: 1
"""


@pytest.fixture
def counters_output() -> str:
    return COUNTERS_OUTPUT


@pytest.fixture
def fake_checker(tmp_path: Path):
    """Write an executable shell script standing in for the checker."""

    def _write(body: str, name: str = "sorbet") -> Path:
        script = tmp_path / name
        script.write_text("#!/bin/sh\n" + body, encoding="utf-8")
        script.chmod(0o755)
        return script

    return _write

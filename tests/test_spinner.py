from __future__ import annotations

import io

from utils.spinner import Spinner


def test_disabled_spinner_writes_nothing() -> None:
    stream = io.StringIO()

    with Spinner("Loading", enabled=False, final_message="done", stream=stream):
        pass

    assert stream.getvalue() == ""


def test_enabled_spinner_clears_line_and_prints_final_message() -> None:
    stream = io.StringIO()

    with Spinner("Loading", interval=0.01, final_message="done", stream=stream) as spinner:
        assert spinner.elapsed >= 0.0

    output = stream.getvalue()
    assert output.endswith("done\n")
    assert "\r" in output

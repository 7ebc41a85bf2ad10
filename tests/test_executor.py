from __future__ import annotations

import random

import pytest

from actions import RetryAction
from executor import execute_order
from models import Order


class RecordingAction:
    """Action stand-in that logs what it saw."""

    def __init__(self, name: str, log: list, keep: bool = True, rerun: bool = False, suffix: str = "") -> None:  # noqa: ANN001
        self.name = name
        self.log = log
        self._keep = keep
        self._rerun = rerun
        self.suffix = suffix or f"+{name}"
        self.seen_by_run: list[str] = []
        self.seen_by_rerun: list[str] = []

    def keep(self) -> bool:
        self.log.append(f"{self.name}.keep")
        return self._keep

    def run(self, transcript: str) -> str:
        self.log.append(f"{self.name}.run")
        self.seen_by_run.append(transcript)
        return transcript + self.suffix

    def should_rerun(self, transcript: str) -> bool:
        self.log.append(f"{self.name}.should_rerun")
        self.seen_by_rerun.append(transcript)
        return self._rerun


class FailingAction(RecordingAction):
    def run(self, transcript: str) -> str:
        self.log.append(f"{self.name}.run")
        raise RuntimeError("step failed")


def test_steps_run_in_order_over_one_transcript() -> None:
    log: list[str] = []
    a = RecordingAction("a", log)
    b = RecordingAction("b", log)
    result = execute_order(Order("x", "two steps", (a, b)), "t")

    assert result.transcript == "t+a+b"
    assert result.rerun is False
    assert b.seen_by_run == ["t+a"]
    assert log == ["a.keep", "a.run", "a.should_rerun", "b.keep", "b.run", "b.should_rerun"]


def test_skipped_step_passes_transcript_through() -> None:
    log: list[str] = []
    a = RecordingAction("a", log)
    b = RecordingAction("b", log, keep=False)
    c = RecordingAction("c", log)
    result = execute_order(Order("x", "skip middle", (a, b, c)), "t")

    assert "b.run" not in log
    assert c.seen_by_run == ["t+a"]
    assert b.seen_by_rerun == ["t+a"]
    assert result.transcript == "t+a+c"


def test_should_rerun_sees_transcript_after_run() -> None:
    a = RecordingAction("a", [])
    execute_order(Order("x", "one", (a,)), "t")

    assert a.seen_by_rerun == ["t+a"]


@pytest.mark.parametrize("seed", range(25))
def test_any_rerun_request_sticks(seed: int) -> None:
    rng = random.Random(seed)
    n = rng.randint(1, 8)
    keeps = [rng.random() < 0.5 for _ in range(n)]
    reruns = [rng.random() < 0.3 for _ in range(n)]
    steps = tuple(RecordingAction(str(i), [], keep=keeps[i], rerun=reruns[i]) for i in range(n))

    result = execute_order(Order("x", "random", steps), "t")

    assert result.rerun is any(reruns)
    expected = "t" + "".join(f"+{i}" for i in range(n) if keeps[i])
    assert result.transcript == expected


def test_retry_chain_keeps_transcript_and_requests_rerun() -> None:
    result = execute_order(Order("r", "retry", (RetryAction(),)), "what I said")

    assert result.rerun is True
    assert result.transcript == "what I said"


def test_run_error_aborts_remaining_steps() -> None:
    log: list[str] = []
    a = RecordingAction("a", log)
    b = FailingAction("b", log)
    c = RecordingAction("c", log)

    with pytest.raises(RuntimeError, match="step failed"):
        execute_order(Order("x", "fails", (a, b, c)), "t")

    assert "b.should_rerun" not in log
    assert not any(entry.startswith("c.") for entry in log)

import json
import time

import pytest

from sdkbench.errors import ComparisonError, MissingImageError, ToleranceExceededError
from sdkbench.runner import compare_durations, run_comparison, run_sequential, timed_invoke

from .conftest import FakeClient


def test_difference_within_tolerance():
    assert compare_durations(2000, 3500, 8000) == (1500, True)


def test_difference_outside_tolerance():
    assert compare_durations(1000, 9500, 8000) == (8500, False)


def test_difference_at_tolerance_boundary():
    assert compare_durations(9000, 1000, 8000) == (8000, True)


@pytest.mark.asyncio
async def test_timed_invoke_records_failure():
    client = FakeClient("genai", error=RuntimeError("boom"))
    invocation = await timed_invoke(client, None)

    assert not invocation.succeeded
    assert isinstance(invocation.error, RuntimeError)
    assert invocation.response is None
    assert invocation.duration_ms >= 0
    assert invocation.end_time >= invocation.start_time


@pytest.mark.asyncio
async def test_run_comparison_success(prompt, results_dir):
    direct = FakeClient("genai", reply={"text": "a"})
    framework = FakeClient("langchain", reply={"text": "b"})

    outcome = await run_comparison(prompt, direct, framework, results_dir)

    assert outcome.within_tolerance
    assert outcome.tolerance_ms == 8000
    assert outcome.time_difference_ms == abs(
        outcome.direct.duration_ms - outcome.framework.duration_ms
    )
    outcome.check()
    assert direct.calls == [prompt]
    assert framework.calls == [prompt]

    files = sorted(p.name for p in results_dir.iterdir())
    assert files == ["genai.json", "langchain.json"]
    for name in files:
        data = json.loads((results_dir / name).read_text(encoding="utf-8"))
        assert set(data) == {"duration", "durationMs", "result", "timestamp"}
        seconds, millis = data["duration"].split(":")
        assert int(seconds) * 1000 + int(millis) == data["durationMs"]


@pytest.mark.asyncio
async def test_calls_run_concurrently(prompt, results_dir):
    direct = FakeClient("genai", delay=0.3)
    framework = FakeClient("langchain", delay=0.3)

    start = time.perf_counter()
    await run_comparison(prompt, direct, framework, results_dir)
    elapsed = time.perf_counter() - start

    assert elapsed < 0.55


@pytest.mark.asyncio
async def test_outside_tolerance(prompt, results_dir):
    direct = FakeClient("genai")
    framework = FakeClient("langchain", delay=0.1)

    outcome = await run_comparison(prompt, direct, framework, results_dir, tolerance_ms=0)

    assert not outcome.within_tolerance
    assert outcome.time_difference_ms > 0
    with pytest.raises(ToleranceExceededError):
        outcome.check()


@pytest.mark.asyncio
async def test_failure_does_not_cancel_other_side(prompt, results_dir):
    direct = FakeClient("genai", reply="ok", delay=0.05)
    framework = FakeClient("langchain", error=ConnectionError("backend down"))

    with pytest.raises(ComparisonError) as excinfo:
        await run_comparison(prompt, direct, framework, results_dir)

    assert [inv.label for inv in excinfo.value.failures] == ["langchain"]
    assert "langchain failed" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert direct.calls == [prompt]

    genai = json.loads((results_dir / "genai.json").read_text(encoding="utf-8"))
    langchain = json.loads((results_dir / "langchain.json").read_text(encoding="utf-8"))
    assert genai["result"] == "ok"
    assert "error" not in genai
    assert langchain["result"] is None
    assert "backend down" in langchain["error"]


@pytest.mark.asyncio
async def test_both_sides_failed(prompt, results_dir):
    direct = FakeClient("genai", error=PermissionError("bad key"))
    framework = FakeClient("langchain", error=MissingImageError("no image"))

    with pytest.raises(ComparisonError) as excinfo:
        await run_comparison(prompt, direct, framework, results_dir)

    assert [inv.label for inv in excinfo.value.failures] == ["genai", "langchain"]


@pytest.mark.asyncio
async def test_each_client_called_once(prompt, results_dir):
    direct = FakeClient("genai", error=TimeoutError())
    framework = FakeClient("langchain")

    with pytest.raises(ComparisonError):
        await run_comparison(prompt, direct, framework, results_dir)

    assert len(direct.calls) == 1
    assert len(framework.calls) == 1


@pytest.mark.asyncio
async def test_persistence_error_propagates(prompt, tmp_path):
    blocker = tmp_path / "results"
    blocker.write_text("not a directory")

    with pytest.raises(OSError):
        await run_comparison(prompt, FakeClient("genai"), FakeClient("langchain"), blocker)


@pytest.mark.asyncio
async def test_run_sequential_logs_errors(prompt, caplog):
    direct = FakeClient("genai", reply="ok")
    framework = FakeClient("langchain", error=RuntimeError("nope"))

    first, second = await run_sequential(prompt, direct, framework)

    assert first.succeeded and first.response == "ok"
    assert not second.succeeded
    assert "langchain error: nope" in caplog.text

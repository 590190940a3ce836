import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from rag_injector.host import ChatRequest, HostContext
from rag_injector.pipeline.engine import InjectionPipeline, PipelineContext, PipelineStep
from rag_injector.pipeline.tracer import PipelineTracer


def _context(messages=None):
    return PipelineContext(
        request=ChatRequest(messages=messages or [{"role": "user", "content": "Hi"}]),
        host=HostContext(),
        send=AsyncMock(),
    )


class RecordStep(PipelineStep):
    def __init__(self, seen, halt=False):
        self.seen = seen
        self.halt = halt

    async def run(self, context):
        self.seen.append(self)
        if self.halt:
            context.halt("stop here")
        return context


class BoomStep(PipelineStep):
    async def run(self, context):
        raise RuntimeError("boom")


@pytest.mark.asyncio
async def test_tracer_capture_and_write(tmp_path, monkeypatch):
    trace_file = tmp_path / "injection_trace.json"
    monkeypatch.setattr("rag_injector.pipeline.tracer.TRACE_FILE", trace_file)

    tracer = PipelineTracer()
    context = _context()
    context.rag_response = "gold"
    context.injection_content = "[Retrieved Context]\ngold\n[End Context]"
    context.step_metadata["restored_messages"] = 0

    tracer.capture("TestStep", context)

    data = json.loads(trace_file.read_text(encoding="utf-8"))
    assert data["trace_id"].startswith("trace_")
    assert "total_latency_ms" in data
    assert data["injection_content"].startswith("[Retrieved Context]")

    step = data["steps"][0]
    assert step["step"] == "TestStep"
    assert step["rag_response"] == "gold"
    assert step["message_count"] == 1
    assert step["messages"][0]["content"] == "Hi"
    assert step["metadata"] == {"restored_messages": 0}
    assert "latency_ms" in step
    assert "elapsed_ms" in step
    assert "halt_reason" not in step


def test_tracer_snapshots_are_copies(tmp_path, monkeypatch):
    monkeypatch.setattr("rag_injector.pipeline.tracer.TRACE_FILE", tmp_path / "t.json")
    tracer = PipelineTracer()
    context = _context()

    tracer.capture("Start", context)
    context.messages[0]["content"] = "changed"

    assert tracer.steps[0]["messages"][0]["content"] == "Hi"


def test_tracer_write_failure_is_logged(tmp_path, monkeypatch, caplog):
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    monkeypatch.setattr("rag_injector.pipeline.tracer.TRACE_FILE", blocker / "trace.json")

    PipelineTracer().capture("Start", _context())

    assert "Failed to write pipeline trace" in caplog.text


@pytest.mark.asyncio
async def test_pipeline_captures_start_and_each_step():
    seen = []
    step = RecordStep(seen)
    tracer = MagicMock()
    context = _context()

    result = await InjectionPipeline([step], tracer=tracer).run(context)

    assert result is context
    assert seen == [step]
    assert tracer.capture.call_count == 2
    tracer.capture.assert_any_call("Start", context)
    tracer.capture.assert_any_call("RecordStep", context)


@pytest.mark.asyncio
async def test_pipeline_stops_after_halt():
    seen = []
    first, second = RecordStep(seen, halt=True), RecordStep(seen)

    context = await InjectionPipeline([first, second]).run(_context())

    assert seen == [first]
    assert context.halt_reason == "stop here"


@pytest.mark.asyncio
async def test_pipeline_reraises_and_still_traces():
    tracer = MagicMock()

    with pytest.raises(RuntimeError, match="boom"):
        await InjectionPipeline([BoomStep()], tracer=tracer).run(_context())

    assert [c.args[0] for c in tracer.capture.call_args_list] == ["Start", "BoomStep"]

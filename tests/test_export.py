from pathlib import Path

import pytest

from playlog.core.events import PlayEvent, PlayEventType as T
from playlog.core.export import SinkError, export_events


EVENTS = [
    PlayEvent(T.SHELL_OPEN, 0),
    PlayEvent(T.USER_TIME_CHANGE_OLD, 10),
    PlayEvent(T.USER_TIME_CHANGE_NEW, 20),
]


class _ShortSink:
    def __init__(self, accept: int):
        self.accept = accept
        self.closed = False
        self.data = b""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        return False

    def write(self, data: bytes) -> int:
        self.data = data[: self.accept]
        return len(self.data)


def test_export_writes_file_and_counts_pre_merge_events(tmp_path: Path):
    out = tmp_path / "play_events.log"
    count = export_events(EVENTS, out)

    assert count == 3
    assert out.read_text() == (
        "2000-01-01 00:00: Shell open\n"
        "2000-01-01 00:20: User time change from 2000-01-01 00:10 to 2000-01-01 00:20\n"
    )


def test_export_overwrites_existing_file(tmp_path: Path):
    out = tmp_path / "play_events.log"
    out.write_text("stale content that is much longer than the new log\n" * 10)

    export_events([PlayEvent(T.SYSTEM_SHUTDOWN, 0)], out)

    assert out.read_text() == "2000-01-01 00:00: System shutdown\n"


def test_export_empty_sequence_writes_empty_file(tmp_path: Path):
    out = tmp_path / "play_events.log"
    assert export_events([], out) == 0
    assert out.exists()
    assert out.read_bytes() == b""


def test_export_open_failure(tmp_path: Path):
    out = tmp_path / "missing_dir" / "play_events.log"
    with pytest.raises(SinkError) as excinfo:
        export_events(EVENTS, out)
    assert "Failed to open" in str(excinfo.value)


def test_export_open_failure_from_opener(tmp_path: Path):
    def opener(path):
        raise PermissionError(13, "Permission denied")

    with pytest.raises(SinkError) as excinfo:
        export_events(EVENTS, tmp_path / "x.log", opener=opener)
    assert "Permission denied" in str(excinfo.value)


def test_export_short_write_is_failure(tmp_path: Path):
    sink = _ShortSink(accept=5)

    with pytest.raises(SinkError) as excinfo:
        export_events(EVENTS, tmp_path / "x.log", opener=lambda path: sink)

    assert "5 of" in str(excinfo.value)
    assert sink.closed


def test_export_sink_closed_on_success(tmp_path: Path):
    sink = _ShortSink(accept=10_000)
    assert export_events(EVENTS, tmp_path / "x.log", opener=lambda path: sink) == 3
    assert sink.closed
    assert sink.data.endswith(b"to 2000-01-01 00:20\n")


class _FaultySink(_ShortSink):
    def __init__(self, fail_write: bool = False, fail_close: bool = False):
        super().__init__(accept=10_000)
        self.fail_write = fail_write
        self.fail_close = fail_close

    def __exit__(self, exc_type, exc, tb):
        self.closed = True
        if self.fail_close:
            raise OSError(5, "Input/output error")
        return False

    def write(self, data: bytes) -> int:
        if self.fail_write:
            raise OSError(28, "No space left on device")
        return super().write(data)


def test_export_close_failure_is_sink_error(tmp_path: Path):
    sink = _FaultySink(fail_close=True)

    with pytest.raises(SinkError) as excinfo:
        export_events(EVENTS, tmp_path / "x.log", opener=lambda path: sink)

    assert "Input/output error" in str(excinfo.value)


def test_export_write_exception_is_sink_error_and_closes_sink(tmp_path: Path):
    sink = _FaultySink(fail_write=True)

    with pytest.raises(SinkError) as excinfo:
        export_events(EVENTS, tmp_path / "x.log", opener=lambda path: sink)

    assert "No space left on device" in str(excinfo.value)
    assert sink.closed


def test_sink_error_is_an_oserror():
    assert issubclass(SinkError, OSError)

import logging
import os

import pytest

from hotswap import (
    MemberNotFound,
    install_logger,
    invoke_instance_method,
    invoke_static_method,
    read_field,
    trace,
)
from hotswap.utils import LoggerSink, NullSink, install_logger_from_env, load_env
from hotswap.utils.logging_sink import current_sink


class _RecordingSink:
    def __init__(self, enabled: bool = True):
        self.enabled = enabled
        self.records: list[tuple[int, str, object]] = []

    def log(self, level, message, cause=None):
        self.records.append((level, message, cause))

    def is_loggable(self, level):
        return self.enabled

    @property
    def messages(self) -> list[str]:
        return [message for _, message, _ in self.records]


class _BrokenSink:
    def log(self, level, message, cause=None):
        raise RuntimeError("sink is down")

    def is_loggable(self, level):
        return True


class _Counter:
    def __init__(self):
        self.__hits = 1

    def __bump(self, step: int) -> int:
        self.__hits += step
        return self.__hits


class _SubCounter(_Counter):
    pass


class _Tools:
    @staticmethod
    def __scale(value: int) -> int:
        return value * 10


@pytest.fixture(autouse=True)
def _no_sink():
    install_logger(None)
    yield
    install_logger(None)


def test_default_sink_is_inert():
    assert isinstance(current_sink(), NullSink)
    assert trace("no", "sink", "installed") is None


def test_trace_joins_fragments_with_single_spaces():
    sink = install_logger(_RecordingSink())
    trace("a")
    trace("a", "b")
    trace("a", "b", "c")
    trace("a", "b", "c", 4)
    assert sink.messages == ["a", "a b", "a b c", "a b c 4"]
    assert all(level == logging.DEBUG for level, _, _ in sink.records)


def test_trace_renders_every_fragment_passed():
    sink = install_logger(_RecordingSink())
    trace("a", None, "c")
    trace(None)
    assert sink.messages == ["a None c", "None"]

    with pytest.raises(TypeError):
        trace("a", "b", "c", "d", "e")


def test_trace_is_silent_when_debug_disabled():
    sink = install_logger(_RecordingSink(enabled=False))
    trace("hidden")
    assert sink.records == []


def test_method_resolution_is_traced_without_changing_results():
    plain = invoke_instance_method(_SubCounter(), "__bump", [int], [2])

    sink = install_logger(_RecordingSink())
    traced = invoke_instance_method(_SubCounter(), "__bump", [int], [2])

    assert plain == traced == 3
    assert any(m.startswith("protected_method:__bump on ") for m in sink.messages)
    assert any("Looking in" in m and "_Counter" in m for m in sink.messages)


def test_static_method_call_is_traced():
    sink = install_logger(_RecordingSink())
    assert invoke_static_method(_Tools, "__scale", [int], [3]) == 30
    assert any(
        m.startswith("protected_static_method:__scale on ") and m.endswith("._Tools")
        for m in sink.messages
    )


def test_field_lookup_is_traced():
    sink = install_logger(_RecordingSink())
    assert read_field(_SubCounter, "__hits", _SubCounter()) == 1
    assert any(m.startswith("get_field_by_name:__hits in ") for m in sink.messages)


def test_failures_are_logged_at_error_with_cause():
    sink = install_logger(_RecordingSink())
    with pytest.raises(MemberNotFound) as excinfo:
        read_field(_SubCounter, "__misses", _SubCounter())

    errors = [(message, cause) for level, message, cause in sink.records if level == logging.ERROR]
    assert len(errors) == 1
    assert errors[0][1] is excinfo.value


def test_broken_sink_never_masks_results_or_failures():
    install_logger(_BrokenSink())

    trace("still", "fine")
    assert read_field(_SubCounter, "__hits", _SubCounter()) == 1
    with pytest.raises(MemberNotFound):
        read_field(_SubCounter, "__misses", _SubCounter())


def test_install_stdlib_logger(caplog):
    caplog.set_level(logging.DEBUG, logger="hotswap.test")
    sink = install_logger(logging.getLogger("hotswap.test"))
    assert isinstance(sink, LoggerSink)

    trace("hello", "world")
    with pytest.raises(MemberNotFound):
        read_field(_SubCounter, "__misses", _SubCounter())

    messages = [r.getMessage() for r in caplog.records if r.name == "hotswap.test"]
    assert "hello world" in messages
    failures = [r for r in caplog.records if r.name == "hotswap.test" and r.levelno == logging.ERROR]
    assert failures and failures[0].exc_info is not None


def test_install_rejects_non_sinks():
    with pytest.raises(TypeError):
        install_logger(object())


@pytest.fixture
def isolated_env(monkeypatch, tmp_path):
    """Run from an empty directory with no HOTSWAP_* variables set."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("HOTSWAP_")}
    monkeypatch.setattr(os, "environ", env)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_install_logger_from_env(monkeypatch, isolated_env):
    monkeypatch.setenv("HOTSWAP_LOG_LEVEL", "debug")
    monkeypatch.setenv("HOTSWAP_LOGGER", "hotswap.env-test")

    sink = install_logger_from_env()
    assert isinstance(sink, LoggerSink)
    assert sink.logger.name == "hotswap.env-test"
    assert sink.is_loggable(logging.DEBUG)
    assert current_sink() is sink


def test_install_logger_from_env_reads_dotenv_file(isolated_env):
    (isolated_env / ".env").write_text("HOTSWAP_LOG_LEVEL=INFO\nHOTSWAP_LOGGER=hotswap.dotenv-test\n")

    sink = install_logger_from_env()
    assert isinstance(sink, LoggerSink)
    assert sink.logger.name == "hotswap.dotenv-test"
    assert sink.is_loggable(logging.INFO)
    assert not sink.is_loggable(logging.DEBUG)


def test_environment_wins_over_dotenv_file(monkeypatch, isolated_env):
    (isolated_env / ".env").write_text("HOTSWAP_LOG_LEVEL=INFO\nHOTSWAP_LOGGER=hotswap.file\n")
    monkeypatch.setenv("HOTSWAP_LOGGER", "hotswap.process")

    load_env()
    assert os.environ["HOTSWAP_LOGGER"] == "hotswap.process"
    assert os.environ["HOTSWAP_LOG_LEVEL"] == "INFO"


def test_install_logger_from_env_without_level(isolated_env):
    sink = install_logger(_RecordingSink())

    assert install_logger_from_env() is None
    assert current_sink() is sink


def test_install_logger_from_env_rejects_unknown_level(monkeypatch, isolated_env):
    monkeypatch.setenv("HOTSWAP_LOG_LEVEL", "chatty")
    with pytest.raises(ValueError):
        install_logger_from_env()

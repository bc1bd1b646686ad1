"""Tests for the logger tree"""

import gc
import io
import json
import threading

import pytest

from logaro import (
    EncodingError, LoggerBuilder, LogLevel, Logger, LoggerConfig, SerializerError,
    generate_root, mask,
)
from logaro.core.log_level import is_enabled, severity, level_name
from logaro.writers import MemoryWriter, StreamWriter


class FailingWriter:
    """Writer whose sink always rejects the write."""

    def __init__(self):
        self.calls = 0

    def write(self, entry) -> None:
        self.calls += 1
        raise OSError("disk full")


@pytest.fixture
def writer():
    return MemoryWriter()


@pytest.fixture
def root(writer):
    return generate_root(writer)


class TestLogLevel:
    """Test log level functionality."""

    def test_log_levels(self):
        assert LogLevel.DEBUG < LogLevel.INFO
        assert LogLevel.INFO < LogLevel.WARN
        assert LogLevel.WARN < LogLevel.ERROR
        assert LogLevel.ERROR < LogLevel.FATAL

    def test_severity_table(self):
        assert [severity(n) for n in ("debug", "info", "warn", "error", "fatal")] == [1, 2, 3, 4, 5]

    def test_str_is_wire_name(self):
        assert str(LogLevel.WARN) == "warn"
        assert level_name(LogLevel.FATAL) == "fatal"
        assert level_name("custom") == "custom"

    def test_from_string(self):
        assert LogLevel.from_string("DEBUG") == LogLevel.DEBUG
        assert LogLevel.from_string("info") == LogLevel.INFO
        with pytest.raises(ValueError):
            LogLevel.from_string("verbose")

    @pytest.mark.parametrize("configured,candidate,expected", [
        ("info", "debug", False),
        ("info", "info", True),
        ("info", "fatal", True),
        ("error", "warn", False),
        ("debug", "debug", True),
    ])
    def test_is_enabled(self, configured, candidate, expected):
        assert is_enabled(configured, candidate) is expected

    def test_unknown_candidate_is_never_enabled(self):
        assert severity("verbose") == 0
        assert is_enabled("debug", "verbose") is False

    def test_unknown_configured_level_enables_everything(self):
        assert is_enabled("verbose", "debug") is True
        assert is_enabled("verbose", "whatever") is True

    def test_lookup_is_case_sensitive(self):
        assert severity("INFO") == 0


class TestLoggerConfig:
    """Test logger configuration."""

    def test_default_config(self):
        config = LoggerConfig.default()
        assert config.level == "info"
        assert config.utc is False
        assert config.sort_keys is True

    def test_debug_config(self):
        config = LoggerConfig.debug_config()
        assert config.level == "debug"

    def test_production_config(self):
        config = LoggerConfig.production_config()
        assert config.level == "warn"
        assert config.utc is True

    def test_level_enum_is_normalized(self):
        assert LoggerConfig(level=LogLevel.ERROR).level == "error"

    def test_invalid_error_handler(self):
        with pytest.raises(TypeError):
            LoggerConfig(error_handler="stderr")


class TestGenerateRoot:
    """Test root logger creation."""

    def test_defaults(self, root, writer):
        assert root.level == "info"
        assert root.parent is None
        assert root.children == ()
        assert dict(root.event_fields) == {}
        assert root.serializer is None
        assert root.writer is writer

    def test_default_writer_is_stdout(self, capsys):
        log = generate_root()
        assert isinstance(log.writer, StreamWriter)

        log.info("hello")

        line = capsys.readouterr().out.strip()
        data = json.loads(line)
        assert data["message"] == "hello"
        assert data["level"] == "info"
        assert data["fields"] == {}

    def test_level_from_config(self, writer):
        log = generate_root(writer, LoggerConfig(level="error"))
        assert log.level == "error"


class TestLevelFiltering:
    """Test which calls reach the writer."""

    def test_below_threshold_is_dropped(self, root, writer, capsys):
        root.debug("hidden")

        assert writer.entries == []
        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_at_and_above_threshold(self, root, writer):
        root.info("a")
        root.warn("b")
        root.error("c")
        root.fatal("d")

        assert [e.level for e in writer.entries] == ["info", "warn", "error", "fatal"]

    def test_custom_level_string(self, writer):
        log = generate_root(writer, LoggerConfig(level="debug"))
        log.log("trace", "unknown level")
        log.log("debug", "known level")

        assert [e.message for e in writer.entries] == ["known level"]

    def test_entry_level_is_call_level(self, writer):
        log = generate_root(writer, LoggerConfig(level="debug"))
        log.warn("careful")
        assert writer.entries[0].level == "warn"

    def test_level_change_does_not_reach_existing_children(self, root, writer):
        early = root.child({"n": 1})
        root.level = "error"
        late = root.child({"n": 2})

        early.info("early")
        late.info("late")

        assert early.level == "info"
        assert late.level == "error"
        assert [e.message for e in writer.entries] == ["early"]


class TestFieldInheritance:
    """Test field merging along the tree."""

    def test_with_fields_and_call_site_fields(self, root, writer):
        log = root.with_fields({"a": 1})
        log.info("msg", {"b": 2})

        assert dict(writer.entries[0].fields) == {"a": 1, "b": 2}

    def test_chain_overrides(self, root, writer):
        leaf = root.child({"a": 1, "b": 1}).child({"b": 2, "c": 2}).child({"c": 3})
        leaf.info("msg", {"d": 4})

        assert dict(writer.entries[0].fields) == {"a": 1, "b": 2, "c": 3, "d": 4}

    def test_call_site_overrides_everything(self, root, writer):
        root.child({"user": "alice"}).info("msg", {"user": "bob"})
        assert writer.entries[0].fields["user"] == "bob"

    def test_siblings_do_not_share_fields(self, root):
        parent = root.child({"p": 1})
        a = parent.child({"x": 1})
        b = parent.child({"y": 2})

        assert a.merged_fields() == {"p": 1, "x": 1}
        assert b.merged_fields() == {"p": 1, "y": 2}
        assert parent.merged_fields() == {"p": 1}

    def test_event_fields_are_frozen(self, root):
        fields = {"a": 1}
        log = root.child(fields)
        fields["a"] = 2

        assert log.event_fields["a"] == 1
        with pytest.raises(TypeError):
            log.event_fields["a"] = 3

    def test_event_fields_include_ancestors(self, root):
        log = root.child({"a": 1}).child({"b": 2})
        assert dict(log.event_fields) == {"a": 1, "b": 2}

    def test_call_site_fields_are_not_retained(self, root, writer):
        root.info("one", {"tmp": True})
        root.info("two")

        assert "tmp" not in writer.entries[1].fields

    def test_child_outlives_parent(self, writer):
        log = generate_root(writer).child({"service": "api"}).child({"route": "/"})
        gc.collect()

        log.info("still here")

        assert dict(writer.entries[0].fields) == {"service": "api", "route": "/"}


class TestTreeStructure:
    """Test parent/children links."""

    def test_children_in_creation_order(self, root):
        a = root.child()
        b = root.with_fields({"x": 1})
        c = root.with_serializers({})

        assert root.children == (a, b, c)
        assert all(child.parent is root for child in root.children)

    def test_children_share_writer_and_config(self, root):
        log = root.child({"a": 1})
        assert log.writer is root.writer
        assert log.config is root.config

    def test_concurrent_child_creation(self, root):
        def spawn():
            for i in range(100):
                root.child({"i": i})

        threads = [threading.Thread(target=spawn) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(root.children) == 400


class TestSerializers:
    """Test per-logger serializers."""

    def test_mask_field(self, root, writer):
        log = root.with_serializers({"secret": mask})
        log.info("login", {"secret": "abc", "other": "x"})

        fields = writer.entries[0].fields
        assert fields["secret"] == mask("abc")
        assert fields["other"] == "x"

    def test_message_passes_through(self, root, writer):
        root.with_serializers({"secret": mask}).info("plain message")
        assert writer.entries[0].message == "plain message"

    def test_applies_to_inherited_fields(self, root, writer):
        log = root.child({"token": "t0k3n"}).with_serializers({"token": mask})
        log.info("msg")
        assert writer.entries[0].fields["token"] == "***"

    def test_child_does_not_inherit_serializer(self, root, writer):
        masked = root.with_serializers({"secret": mask})
        masked.child({"a": 1}).info("msg", {"secret": "abc"})

        assert writer.entries[0].fields["secret"] == "abc"

    def test_with_fields_inherits_serializer(self, root, writer):
        masked = root.with_serializers({"secret": mask})
        log = masked.with_fields({"a": 1})
        log.info("msg", {"secret": "abc"})

        assert log.serializer is masked.serializer
        assert writer.entries[0].fields["secret"] == "***"

    def test_ancestor_calls_are_not_serialized(self, root, writer):
        root.with_serializers({"secret": mask})
        root.info("msg", {"secret": "abc"})

        assert writer.entries[0].fields["secret"] == "abc"

    def test_new_serializers_replace_old(self, root, writer):
        log = root.with_serializers({"a": mask}).with_serializers({"b": mask})
        log.info("msg", {"a": "1", "b": "2"})

        assert dict(writer.entries[0].fields) == {"a": "1", "b": "***"}

    def test_caller_fields_not_mutated(self, root):
        fields = {"secret": "abc"}
        root.with_serializers({"secret": mask}).info("msg", fields)
        assert fields == {"secret": "abc"}

    def test_bad_serializer_raises(self, writer):
        log = Logger(writer, serializer=lambda value: 42)

        with pytest.raises(SerializerError):
            log.info("msg")
        assert writer.entries == []

    def test_bad_fields_result_raises(self, writer):
        log = Logger(writer, serializer=lambda v: v if isinstance(v, str) else [v])

        with pytest.raises(SerializerError):
            log.info("msg")

    def test_non_callable_transform_rejected(self, root):
        with pytest.raises(TypeError):
            root.with_serializers({"secret": "***"})


class TestWriteFailures:
    """Test that logging never raises on write failures."""

    def test_failure_reported_to_stderr(self, capsys):
        sink = FailingWriter()
        log = generate_root(sink)

        log.info("msg")

        assert sink.calls == 1
        assert "Error encoding log entry: disk full" in capsys.readouterr().err

    def test_failure_reported_to_handler(self):
        failures = []
        log = generate_root(
            FailingWriter(),
            LoggerConfig(error_handler=lambda e, entry: failures.append((e, entry)))
        )

        log.error("msg", {"a": 1})

        assert len(failures) == 1
        error, entry = failures[0]
        assert isinstance(error, OSError)
        assert entry.message == "msg"

    def test_unencodable_field_is_dropped(self, writer, capsys):
        failures = []
        log = generate_root(
            writer,
            LoggerConfig(error_handler=lambda e, entry: failures.append(e))
        )

        log.info("msg", {"obj": object()})

        assert writer.entries == []
        assert len(failures) == 1
        assert isinstance(failures[0], EncodingError)
        assert capsys.readouterr().err == ""

    def test_unencodable_field_reported_to_stderr(self, root, writer, capsys):
        root.info("msg", {"obj": object()})

        assert writer.entries == []
        assert capsys.readouterr().err.count("Error encoding log entry") == 1

    @pytest.mark.parametrize("value", [float("nan"), float("inf")])
    def test_non_finite_float_is_dropped(self, writer, value):
        failures = []
        log = generate_root(
            writer,
            LoggerConfig(error_handler=lambda e, entry: failures.append(e))
        )

        log.info("msg", {"ratio": value})

        assert writer.lines == []
        assert len(failures) == 1
        assert isinstance(failures[0], EncodingError)

    def test_mixed_key_types_are_written(self, root, writer, capsys):
        root.info("msg", {"counts": {1: "a", "b": 2}})

        assert json.loads(writer.lines[0])["fields"]["counts"] == {"1": "a", "b": 2}
        assert capsys.readouterr().err == ""

    def test_non_string_message_is_converted(self, root, writer):
        root.info(404)
        assert writer.entries[0].message == "404"


class TestLoggerBuilder:
    """Test builder pattern."""

    def test_builder_pattern(self):
        stream = io.StringIO()
        log = (LoggerBuilder()
            .with_level(LogLevel.DEBUG)
            .with_utc()
            .with_stream(stream)
            .build())

        log.debug("hello", {"a": 1})

        data = json.loads(stream.getvalue())
        assert data["level"] == "debug"
        assert data["timestamp"].endswith("Z")
        assert log.config.utc is True

    def test_with_file(self, tmp_path):
        path = tmp_path / "logs" / "app.jsonl"
        log = LoggerBuilder().with_file(str(path)).build()

        log.info("one")
        log.child({"a": 1}).info("two")
        log.writer.close()

        lines = path.read_text(encoding="utf-8").splitlines()
        assert [json.loads(line)["message"] for line in lines] == ["one", "two"]

    def test_last_writer_wins(self, writer):
        log = (LoggerBuilder()
            .with_stream(io.StringIO())
            .with_writer(writer)
            .build())
        assert log.writer is writer

    def test_with_writer_requires_write(self):
        with pytest.raises(TypeError):
            LoggerBuilder().with_writer(object())

    def test_with_error_handler(self):
        failures = []
        log = (LoggerBuilder()
            .with_writer(FailingWriter())
            .with_error_handler(lambda e, entry: failures.append(e))
            .build())

        log.info("msg")

        assert len(failures) == 1

    def test_builder_does_not_mutate_given_config(self):
        config = LoggerConfig()
        LoggerBuilder(config).with_level("error").build()
        assert config.level == "info"

"""Tests for field classification and level normalization."""
from __future__ import annotations

import pytest

from jsonlogprint.classify.fields import ClassifiedFields, Field, FieldClassifier
from jsonlogprint.classify.severity import Severity, normalize_level
from jsonlogprint.parsers.base import JsonNumber
from jsonlogprint.parsers.json_parser import RecordParser


def _classify(line: str, classifier: FieldClassifier | None = None) -> tuple[dict, ClassifiedFields]:
    obj = RecordParser().parse_line(line).parsed
    return obj, (classifier or FieldClassifier()).classify(obj)


# ---------------------------------------------------------------------------
# normalize_level
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("value,expected", [
    ("WARN", Severity.WARN),
    ("warn", Severity.WARN),
    ("Warn", Severity.WARN),
    ("warning", Severity.WARN),
    ("WRN", Severity.WARN),
    ("trace", Severity.TRACE),
    ("TRCE", Severity.TRACE),
    ("debug", Severity.DEBUG),
    ("DBG", Severity.DEBUG),
    ("info", Severity.INFO),
    ("information", Severity.INFO),
    ("inf", Severity.INFO),
    ("notice", Severity.INFO),
    ("error", Severity.ERROR),
    ("ERRO", Severity.ERROR),
    ("err", Severity.ERROR),
    ("fatal", Severity.FATAL),
    ("CRITICAL", Severity.FATAL),
    ("crit", Severity.FATAL),
    ("panic", Severity.FATAL),
    ("E", Severity.ERROR),
    ("  info  ", Severity.INFO),
    ("verbose", Severity.UNKNOWN),
    ("in", Severity.UNKNOWN),
    ("", Severity.UNKNOWN),
])
def test_normalize_level(value: str, expected: Severity) -> None:
    assert normalize_level(value) is expected


@pytest.mark.parametrize("value", [JsonNumber("30"), None, True, ["warn"], {"name": "warn"}])
def test_non_string_levels_are_unknown(value) -> None:
    assert normalize_level(value) is Severity.UNKNOWN


@pytest.mark.parametrize("value", ["WARN", "warning", "err", "Trace", "bogus", "F"])
def test_normalize_level_idempotent(value: str) -> None:
    once = normalize_level(value)
    assert normalize_level(once.value) is once


# ---------------------------------------------------------------------------
# FieldClassifier
# ---------------------------------------------------------------------------

class TestFieldClassifier:
    def test_recognized_roles(self) -> None:
        _, fields = _classify('{"timestamp": 1729811012050, "level": "WARN", "message": "hello there"}')
        assert fields.timestamp == Field("timestamp", JsonNumber("1729811012050"))
        assert fields.level is not None
        assert fields.level.severity is Severity.WARN
        assert fields.message == Field("message", "hello there")
        assert fields.remaining == ()
        assert fields.long_text == ()

    def test_msg_fills_message_when_message_absent(self) -> None:
        _, fields = _classify(
            '{"level": "TRACE", "msg": "a message", "prop": "interestingProperty",'
            ' "stacktrace": "foo\\nbar\\nblah", "something": "info"}'
        )
        assert fields.message == Field("msg", "a message")
        assert fields.level.severity is Severity.TRACE
        assert [f.key for f in fields.long_text] == ["stacktrace"]
        assert [f.key for f in fields.remaining] == ["prop", "something"]

    def test_priority_order_wins_over_key_order(self) -> None:
        _, fields = _classify('{"msg": "short", "message": "long", "ts": 1, "time": "t"}')
        assert fields.message.key == "message"
        assert fields.timestamp.key == "time"
        assert [f.key for f in fields.remaining] == ["msg", "ts"]

    def test_matching_is_case_sensitive(self) -> None:
        _, fields = _classify('{"Level": "WARN", "MESSAGE": "x"}')
        assert fields.level is None
        assert fields.message is None
        assert [f.key for f in fields.remaining] == ["Level", "MESSAGE"]

    def test_key_claimed_once_across_roles(self) -> None:
        classifier = FieldClassifier(level_keys=("msg",), message_keys=("msg", "text"))
        _, fields = _classify('{"msg": "warn", "text": "hello"}', classifier)
        assert fields.level.key == "msg"
        assert fields.message.key == "text"

    def test_numeric_level_is_unknown_but_claimed(self) -> None:
        _, fields = _classify('{"level": 30, "msg": "hi"}')
        assert fields.level.key == "level"
        assert fields.level.severity is Severity.UNKNOWN

    def test_container_values_are_not_claimed(self) -> None:
        _, fields = _classify('{"message": {"text": "x"}, "msg": "fallback", "level": null}')
        assert fields.message.key == "msg"
        assert fields.level is None
        assert [f.key for f in fields.remaining] == ["message", "level"]

    def test_message_with_newline_stays_message(self) -> None:
        _, fields = _classify('{"msg": "line one\\nline two"}')
        assert fields.message.key == "msg"
        assert fields.long_text == ()

    def test_long_text_only_for_strings(self) -> None:
        _, fields = _classify('{"a": "x\\ny", "b": ["x\\ny"], "c": "plain"}')
        assert [f.key for f in fields.long_text] == ["a"]
        assert [f.key for f in fields.remaining] == ["b", "c"]

    def test_custom_candidate_lists(self) -> None:
        classifier = FieldClassifier(timestamp_keys=("when",), level_keys=("sev",), message_keys=("event",))
        _, fields = _classify('{"when": "now", "sev": "error", "event": "boom", "message": "ignored"}', classifier)
        assert fields.timestamp.key == "when"
        assert fields.level.severity is Severity.ERROR
        assert fields.message.key == "event"
        assert [f.key for f in fields.remaining] == ["message"]

    def test_empty_object(self) -> None:
        _, fields = _classify("{}")
        assert not fields.has_header
        assert fields.keys() == []

    def test_deterministic(self) -> None:
        line = '{"ts": 1, "lvl": "x", "msg": "m", "trace": "a\\nb", "k": 1}'
        assert _classify(line)[1] == _classify(line)[1]

    @pytest.mark.parametrize("line", [
        '{"timestamp": 1, "level": "info", "message": "m", "extra": 2}',
        '{"a": 1, "b": "x\\ny", "c": {"d": 1}}',
        '{"msg": "m", "message": "n", "level": 5, "lvl": "warn", "stack": "1\\n2"}',
        '{"level": {"nested": true}, "severity": "debug", "time": null, "ts": "t"}',
        "{}",
    ])
    def test_partition_has_every_key_exactly_once(self, line: str) -> None:
        obj, fields = _classify(line)
        keys = fields.keys()
        assert len(keys) == len(set(keys))
        assert set(keys) == set(obj)

"""Structured logging: secret masking and context capture."""

import json
import logging

import pytest

from core.logging import bootstrap_logging, get_logger, shutdown_logging
from core.logging.context import log_context
from core.logging.formatter import JSONFormatter, mask, redact


def test_mask_keeps_only_edges():
    assert mask("eyJ0eXAiOiJKV1QiLCJh") == "eyJ0***Jh"
    assert mask("short") == "***"


def test_redact_walks_nested_payloads():
    payload = {
        "key_id": "k1",
        "Authorization": "Bearer abcdefghijklmnop",
        "nested": [{"password": "hunter22"}, {"cookie": "session=abcdefghij"}],
    }
    assert redact(payload) == {
        "key_id": "k1",
        "Authorization": "Bear***op",
        "nested": [{"password": "***"}, {"cookie": "sess***ij"}],
    }


def test_json_formatter_masks_extra_and_context():
    record = logging.getLogger("t").makeRecord(
        "t", logging.INFO, __file__, 1, "token-created", None, None,
        extra={"token": "abcdefghijklmnop", "key_id": "k1", "context": {"address": "203.0.113.5", "secret": "s3cr3t-value"}},
    )
    payload = json.loads(JSONFormatter().format(record))
    assert payload["message"] == "token-created"
    assert payload["extra"] == {"token": "abcd***op", "key_id": "k1"}
    assert payload["context"] == {"address": "203.0.113.5", "secret": "s3cr***ue"}


def test_structured_logger_captures_bound_context(caplog):
    caplog.set_level(logging.DEBUG)
    log = get_logger("tests.context", service="token")
    with log_context(address="203.0.113.5", key_name="autoCreate"):
        log.info(lambda: "token-adopted", extra={"key_id": "k1"})
    log.info(lambda: "after")

    inside, after = caplog.records[-2:]
    assert inside.context == {"address": "203.0.113.5", "key_name": "autoCreate"}
    assert inside.service == "token"
    assert not hasattr(after, "context")


def test_lazy_message_not_built_when_disabled(caplog):
    caplog.set_level(logging.WARNING)
    built = []
    get_logger("tests.lazy").debug(lambda: built.append(1) or "expensive")
    assert built == []


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    shutdown_logging()
    root.handlers[:] = handlers
    root.setLevel(level)


def test_bootstrap_writes_redacted_json_lines(tmp_path, monkeypatch, restore_root_logger):
    monkeypatch.delenv("LOG_CONSOLE", raising=False)
    bootstrap_logging(service="test", level="INFO", log_dir=tmp_path, log_file_name="out.jsonl")
    get_logger("tests.file", service="portal").success(
        lambda: "portal-login-ok", extra={"cookie": "session=abcdefghij", "expires_at": 1}
    )
    shutdown_logging()

    lines = [json.loads(line) for line in (tmp_path / "out.jsonl").read_text().splitlines()]
    (entry,) = [line for line in lines if line["message"] == "portal-login-ok"]
    assert entry["level"] == "SUCCESS"
    assert entry["service"] == "portal"
    assert entry["extra"] == {"cookie": "sess***ij", "expires_at": 1}

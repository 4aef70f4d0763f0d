"""Tests for the contextual logger and JSON formatter."""

import json
import logging

from accessgraph.core.logging import ContextualLogger, JSONFormatter, logger


def test_with_context_merges_dimensions():
    """Dimensions accumulate and never mutate the parent logger."""
    child = logger.with_context(component="resolver").with_context(depth=2)

    assert child.dimensions == {"component": "resolver", "depth": 2}
    assert logger.dimensions == {}


def test_with_prefix_keeps_dimensions():
    """A prefixed logger carries the dimensions it was derived from."""
    child = logger.with_context(component="guard").with_prefix("AccessPolicyGuard: ")

    msg, kwargs = child.process("denied", {})

    assert msg == "AccessPolicyGuard: denied"
    assert kwargs["extra"] == {"component": "guard"}


def test_call_site_extra_overrides_dimensions():
    """Per-call extra wins over fixed dimensions."""
    child = logger.with_context(component="a", entity="x")

    _, kwargs = child.process("m", {"extra": {"entity": "y"}})

    assert kwargs["extra"] == {"component": "a", "entity": "y"}


def test_records_carry_dimensions(caplog):
    """Emitted records expose the dimensions as attributes."""
    child = logger.with_prefix("Test: ").with_context(component="unit_test")

    with caplog.at_level(logging.DEBUG, logger="accessgraph"):
        child.info("hello")

    record = next(r for r in caplog.records if r.getMessage() == "Test: hello")
    assert record.component == "unit_test"
    assert record.name == "accessgraph"


def test_json_formatter_inlines_context():
    """The JSON formatter emits one object with the context dimensions."""
    base = logging.getLogger("accessgraph.json-test")
    adapter = ContextualLogger(base, {"component": "evaluator"})
    msg, kwargs = adapter.process("checked", {})
    record = base.makeRecord(
        base.name, logging.INFO, __file__, 1, msg, None, None, extra=kwargs["extra"]
    )

    payload = json.loads(JSONFormatter().format(record))

    assert payload["message"] == "checked"
    assert payload["level"] == "INFO"
    assert payload["component"] == "evaluator"

"""
Unit tests for engine configuration and engine logging.
"""

import logging

import pytest

from waterfall import ConfigError, Flow, FlowConfig, configure, get_config, reset_config


def test_defaults():
    config = get_config()
    assert config.reversible_flow is True
    assert config.log_skipped is False


def test_configure_changes_defaults_for_new_flows():
    before = Flow()
    configure(reversible_flow=False)

    assert Flow().config.reversible_flow is False
    assert before.config.reversible_flow is True


def test_configure_rejects_unknown_options():
    with pytest.raises(ConfigError, match="retries"):
        configure(retries=3)


def test_reset_config():
    configure(log_skipped=True)
    assert reset_config() == FlowConfig()
    assert get_config().log_skipped is False


def test_replace_returns_a_copy():
    config = FlowConfig()
    changed = config.replace(log_skipped=True)
    assert changed.log_skipped is True
    assert config.log_skipped is False
    assert repr(changed) == "FlowConfig(reversible_flow=True, log_skipped=True)"


def test_block_is_logged(caplog):
    with caplog.at_level(logging.DEBUG, logger="waterfall"):
        Flow().block("stop")
    assert any("dammed with 'stop'" in record.getMessage() for record in caplog.records)


def test_skipped_bodies_are_logged_when_enabled(caplog):
    config = FlowConfig(log_skipped=True)
    with caplog.at_level(logging.DEBUG, logger="waterfall"):
        Flow(config=config).block("stop").chain(lambda o: 1)
    assert any(record.getMessage().startswith("Skipping chain") for record in caplog.records)


def test_skipped_bodies_are_quiet_by_default(caplog):
    with caplog.at_level(logging.DEBUG, logger="waterfall"):
        Flow().block("stop").chain(lambda o: 1)
    assert not any(record.getMessage().startswith("Skipping") for record in caplog.records)

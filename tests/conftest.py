"""Pytest configuration for servicelogger tests."""

import logging

import pytest


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch, tmp_path):
    """Keep host settings out of config resolution."""
    for name in ("OCM_URL", "OCM_TOKEN", "CLUSTER_ID", "CLUSTER_IDS", "SERVICELOGGER_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SERVICELOGGER_CONFIG", str(tmp_path / "missing-config.yml"))
    logging.getLogger("servicelogger").handlers.clear()


def pytest_collection_modifyitems(config, items):
    """Set per-marker timeouts: unit=1s, integration=5s."""
    for item in items:
        if "unit" in item.keywords:
            item.add_marker(pytest.mark.timeout(1))
        elif "integration" in item.keywords:
            item.add_marker(pytest.mark.timeout(5))

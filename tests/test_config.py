"""
Tests for environment-driven settings.
"""

import importlib

import pytest

from sales_report import config


@pytest.fixture
def reload_config(monkeypatch):
    yield lambda: importlib.reload(config)
    monkeypatch.undo()
    importlib.reload(config)


class TestTopProductsLimit:
    def test_env_value_above_ten_is_clamped(self, monkeypatch, reload_config):
        monkeypatch.setenv("TOP_PRODUCTS_LIMIT", "25")
        assert reload_config().TOP_PRODUCTS_LIMIT == 10

    def test_env_value_below_one_is_raised_to_one(self, monkeypatch, reload_config):
        monkeypatch.setenv("TOP_PRODUCTS_LIMIT", "0")
        assert reload_config().TOP_PRODUCTS_LIMIT == 1

    def test_env_value_within_bounds_is_kept(self, monkeypatch, reload_config):
        monkeypatch.setenv("TOP_PRODUCTS_LIMIT", "5")
        assert reload_config().TOP_PRODUCTS_LIMIT == 5

"""Collection hook: location markers, UI test timeout and the `only` focus marker."""

from pathlib import Path
from unittest.mock import MagicMock

import pytest

from cruise_suites.conftest import pytest_collection_modifyitems
from cruise_suites.ui_testing.framework.config_loader import ConfigLoader


class FakeItem:
    def __init__(self, path, name, marks=()):
        self.path = Path(path)
        self.nodeid = f"{path}::{name}"
        self.marks = {name: getattr(pytest.mark, name) for name in marks}

    def add_marker(self, marker):
        self.marks[marker.name] = marker

    def get_closest_marker(self, name):
        return self.marks.get(name)


def make_config(ci_flag=False):
    config = MagicMock()
    config.getoption.return_value = ci_flag
    return config


UI_FILE = "cruise_suites/ui_testing/tests/test_search_cruises.py"
UNIT_FILE = "cruise_suites/unit/test_soft_checks.py"


@pytest.fixture(autouse=True)
def local_run(monkeypatch):
    monkeypatch.delenv("CI", raising=False)
    monkeypatch.delenv("UI_TEST_TIMEOUT", raising=False)
    ConfigLoader.reset()
    yield
    ConfigLoader.reset()


def test_items_are_marked_by_location():
    ui_item = FakeItem(UI_FILE, "test_search")
    unit_item = FakeItem(UNIT_FILE, "test_order")
    items = [ui_item, unit_item]

    pytest_collection_modifyitems(make_config(), items)

    assert items == [ui_item, unit_item]
    assert "ui" in ui_item.marks and "unit" not in ui_item.marks
    assert "unit" in unit_item.marks and "ui" not in unit_item.marks


def test_only_marker_narrows_local_run():
    focused = FakeItem(UI_FILE, "test_booking", marks={"only"})
    other = FakeItem(UI_FILE, "test_search")
    items = [other, focused]
    config = make_config()

    pytest_collection_modifyitems(config, items)

    assert items == [focused]
    config.hook.pytest_deselected.assert_called_once_with(items=[other])


def test_only_marker_rejected_with_ci_env(monkeypatch):
    monkeypatch.setenv("CI", "true")
    items = [FakeItem(UI_FILE, "test_booking", marks={"only"})]

    with pytest.raises(pytest.UsageError, match="test_booking"):
        pytest_collection_modifyitems(make_config(), items)


def test_only_marker_rejected_with_ci_option():
    items = [FakeItem(UI_FILE, "test_booking", marks={"only"}), FakeItem(UI_FILE, "test_search")]

    with pytest.raises(pytest.UsageError):
        pytest_collection_modifyitems(make_config(ci_flag=True), items)


def test_ui_items_get_configured_test_timeout(monkeypatch):
    monkeypatch.setenv("UI_TEST_TIMEOUT", "90000")
    ui_item = FakeItem(UI_FILE, "test_search")
    unit_item = FakeItem(UNIT_FILE, "test_order")

    pytest_collection_modifyitems(make_config(), [ui_item, unit_item])

    assert ui_item.get_closest_marker("timeout").args == (90.0,)
    assert unit_item.get_closest_marker("timeout") is None


def test_shipped_test_timeout_is_sixty_seconds():
    ui_item = FakeItem(UI_FILE, "test_search")

    pytest_collection_modifyitems(make_config(), [ui_item])

    assert ui_item.get_closest_marker("timeout").args == (60.0,)


def test_explicit_timeout_marker_is_kept():
    ui_item = FakeItem(UI_FILE, "test_slow_booking")
    ui_item.add_marker(pytest.mark.timeout(300))

    pytest_collection_modifyitems(make_config(), [ui_item])

    assert ui_item.get_closest_marker("timeout").args == (300,)

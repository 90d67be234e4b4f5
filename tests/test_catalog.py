"""catalog モジュールのテスト。"""

from __future__ import annotations

from bcrastat.catalog import BCRA_VARIABLES, get_variable, is_known_variable, variable_label, variable_options
from bcrastat.config import UNKNOWN_VARIABLE_LABEL


def test_catalog_values_are_unique() -> None:
    values = [entry.value for entry in BCRA_VARIABLES]
    assert len(values) == len(set(values))


def test_variable_label_known() -> None:
    entry = get_variable(1)
    assert entry is not None
    assert variable_label(1) == entry.name
    assert is_known_variable(1)


def test_variable_label_unknown_uses_sentinel() -> None:
    assert variable_label(99999) == UNKNOWN_VARIABLE_LABEL
    assert get_variable(99999) is None
    assert not is_known_variable(99999)


def test_variable_options_preserve_catalog_order() -> None:
    options = variable_options()
    assert [o["value"] for o in options] == [entry.value for entry in BCRA_VARIABLES]
    assert set(options[0]) == {"value", "name"}

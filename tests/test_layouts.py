from __future__ import annotations

import pytest

from zestarcat.layouts import get_layout, list_layout_names


def test_bundled_layouts_are_loaded():
    assert list_layout_names() == ("gj_ac", "gj_cns3")
    cns3 = get_layout("gj_cns3")
    assert cns3.min_length == 119
    assert cns3.field("ra").stop == 20
    assert cns3.field("name").stop is None
    assert cns3.field("name").min_length == 190
    assert cns3.field("vmag").min_length == 73
    assert [column.name for column in cns3.iter_fields()][:3] == ["gj", "components", "ra"]


def test_every_column_fits_before_its_requirement():
    for name in list_layout_names():
        layout = get_layout(name)
        for column in layout.iter_fields():
            if column.stop is not None:
                assert column.stop <= column.min_length


def test_unknown_names_raise_key_error():
    with pytest.raises(KeyError):
        get_layout("hipparcos")
    with pytest.raises(KeyError):
        get_layout("gj_ac").field("parallax")

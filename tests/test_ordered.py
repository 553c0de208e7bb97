from __future__ import annotations

from pageassets.ordered import OrderedAssets, insert_after, insert_before


def _collection(*names: str) -> OrderedAssets:
    items = OrderedAssets()
    for name in names:
        items.add(name)
    return items


def test_add_is_idempotent_and_keeps_first_position() -> None:
    items = _collection("a.css", "b.css", "a.css")
    assert items.keys() == ["a.css", "b.css"]
    assert items.as_dict() == {"a.css": "a.css", "b.css": "b.css"}


def test_insert_before_and_after_anchor() -> None:
    items = _collection("1.css", "2.css", "3.css")
    items.insert_before("before2.css", "2.css")
    assert items.keys() == ["1.css", "before2.css", "2.css", "3.css"]
    items.insert_after("after2.css", "2.css")
    assert items.keys() == ["1.css", "before2.css", "2.css", "after2.css", "3.css"]


def test_insert_relative_to_missing_anchor_appends() -> None:
    items = _collection("a.css")
    items.insert_before("b.css", "missing.css")
    items.insert_after("c.css", "missing.css")
    assert items.keys() == ["a.css", "b.css", "c.css"]


def test_insert_moves_existing_identifier() -> None:
    items = _collection("a.css", "b.css", "c.css", "d.css")
    items.insert_before("a.css", "d.css")
    assert items.keys() == ["b.css", "c.css", "a.css", "d.css"]
    items.insert_after("d.css", "b.css")
    assert items.keys() == ["b.css", "d.css", "c.css", "a.css"]


def test_insert_relative_to_itself_appends() -> None:
    items = _collection("a.css", "b.css")
    items.insert_before("a.css", "a.css")
    assert items.keys() == ["b.css", "a.css"]


def test_empty_identifier_is_a_distinct_key() -> None:
    items = OrderedAssets()
    items.insert_before("", "b.css")
    assert items.as_dict() == {"": ""}
    items.insert_after("", "b.css")
    assert items.as_dict() == {"": ""}


def test_helpers_do_not_mutate_input() -> None:
    source = {"a": "a", "b": "b"}
    assert list(insert_before(source, "x", "b")) == ["a", "x", "b"]
    assert list(insert_after(source, "x", "a")) == ["a", "x", "b"]
    assert source == {"a": "a", "b": "b"}

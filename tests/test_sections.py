from __future__ import annotations

import itertools

from pageassets.sections import (
    ScriptAttributes,
    ScriptSections,
    SnippetSections,
    split_script_params,
)


def _assert_invariants(sections: ScriptSections) -> None:
    seen: dict[str, str] = {}
    for name, items in sections.as_dict().items():
        assert items, f"section {name!r} left empty"
        for item in items:
            assert item not in seen, f"{item!r} in {seen[item]!r} and {name!r}"
            seen[item] = name


def test_split_params_defaults_and_shorthand() -> None:
    assert split_script_params(None) == ("footer", {})
    assert split_script_params("header") == ("header", {})
    assert split_script_params("") == ("footer", {})
    assert split_script_params({"name": "top", "defer": True}) == ("top", {"defer": True})
    assert split_script_params({"name": None, "type": "module"}) == ("footer", {"type": "module"})


def test_add_moves_identifier_between_sections() -> None:
    sections = ScriptSections()
    sections.add("script.js")
    sections.add("script.js", {"name": "foobar"})
    assert "footer" not in sections
    assert sections.section("foobar") == ["script.js"]
    assert sections.locate("script.js") == "foobar"


def test_add_copies_attributes_without_name() -> None:
    sections = ScriptSections()
    sections.add("app.js", {"name": "footer2", "type": "text/jsx", "async": "true", "defer": None})
    attrs = sections.attributes("footer2", "app.js")
    assert attrs == ScriptAttributes(type="text/jsx", defer=None, async_="true")
    assert "name" not in attrs.as_dict()


def test_attributes_merge_and_keep_unrelated_keys() -> None:
    sections = ScriptSections()
    sections.add("app.js", {"type": "module", "data-main": "boot"})
    sections.add("app.js", {"defer": "1"})
    attrs = sections.attributes("footer", "app.js")
    assert attrs.type == "module"
    assert attrs.defer == "1"
    assert attrs.get("data-main") == "boot"


def test_empty_identifier_only_cleans_up() -> None:
    sections = ScriptSections()
    sections.add("", {"name": "footer"})
    assert sections.as_dict() == {}
    sections.add("a.js")
    sections.add("", "footer")
    assert sections.section("footer") == ["a.js"]


def test_insert_before_creates_section_and_orders() -> None:
    sections = ScriptSections()
    for name in ("a.js", "b.js", "c.js"):
        sections.add(name)
    sections.insert_before("x.js", "b.js")
    assert sections.section("footer") == ["a.js", "x.js", "b.js", "c.js"]
    sections.insert_after("y.js", "missing.js", {"name": "head", "type": "module"})
    assert sections.section("head") == ["y.js"]
    assert sections.attributes("head", "y.js").type == "module"


def test_insert_with_empty_identifier_is_noop() -> None:
    sections = ScriptSections()
    sections.insert_before("", "b.js", {"name": "footer"})
    sections.insert_after("", "b.js", {"name": "footer"})
    assert sections.as_dict() == {}


def test_moving_last_entry_deletes_old_section_and_its_attributes() -> None:
    sections = ScriptSections()
    sections.add("foo.js", {"name": "test-section", "type": "module"})
    sections.insert_before("foo.js", "bar.js", {"name": "other-section"})
    assert "test-section" not in sections
    assert sections.attributes("test-section", "foo.js") is None
    assert sections.section("other-section") == ["foo.js"]


def test_single_section_invariant_over_mixed_operations() -> None:
    sections = ScriptSections()
    names = ["a.js", "b.js", "c.js"]
    targets = ["footer", "header", "extra"]
    ops = ["add", "insert_before", "insert_after"]
    for i, (op, name, target) in enumerate(itertools.product(ops, names, targets)):
        anchor = names[(i + 1) % len(names)]
        if op == "add":
            sections.add(name, {"name": target})
        else:
            getattr(sections, op)(name, anchor, {"name": target})
        _assert_invariants(sections)
    assert sorted(itertools.chain.from_iterable(sections.as_dict().values())) == names


def test_snippet_sections_keep_duplicates_in_order() -> None:
    snippets = SnippetSections()
    assert not snippets
    snippets.add("one", "header")
    snippets.add("one", "header")
    snippets.add("two", "foobar")
    assert snippets.get("header") == ["one", "one"]
    assert snippets.as_dict() == {"header": ["one", "one"], "foobar": ["two"]}
    assert snippets.get("missing") == []
    assert snippets

"""Tests for reading target chains from INI files."""

from __future__ import annotations

import pytest

from domevent.lib.event import Event
from domevent.lib.tracer import DispatchTracer
from domevent.lib.tree_config import TargetDecl, TreeConfig, TreeConfigError

CHAIN_INI = """
[target:window]
handlers = load
capture = click

[target:form]
parent = window
bubble = click, submit

[target:button]
parent = form
handlers = click
capture = click
bubble = click
"""


def test_from_string_parses_sections():
    """Test that each [target:<name>] section becomes a TargetDecl in file order."""
    tree = TreeConfig.from_string(CHAIN_INI)

    assert list(tree.declared) == ["window", "form", "button"]
    assert tree.declared["window"] == TargetDecl("window", None, ("load",), ("click",), ())
    assert tree.declared["form"].parent == "window"
    assert tree.declared["form"].bubble == ("click", "submit")
    assert tree.declared["button"].handlers == ("click",)


def test_deepest_and_depth():
    tree = TreeConfig.from_string(CHAIN_INI)
    assert tree.depth("window") == 0
    assert tree.depth("button") == 2
    assert tree.deepest() == "button"


def test_build_links_parents():
    tree = TreeConfig.from_string(CHAIN_INI)

    targets = tree.build()

    assert targets["window"].parent is None
    assert targets["form"].parent is targets["window"]
    assert targets["button"].parent is targets["form"]
    assert targets["button"].handler_names == {"click"}
    assert not targets["button"].has_listeners("click")


def test_build_with_tracer_records_dispatch():
    tracer = DispatchTracer()
    targets = TreeConfig.from_string(CHAIN_INI).build(tracer)

    targets["button"].dispatch_event(Event("click", bubbles=True))

    assert [(entry.target, entry.kind) for entry in tracer.entries] == [
        ("window", "capture"),
        ("button", "capture"),
        ("button", "handler"),
        ("button", "bubble"),
        ("form", "bubble"),
    ]


def test_from_file(tmp_path):
    path = tmp_path / "chain.ini"
    path.write_text(CHAIN_INI, encoding="utf-8")

    tree = TreeConfig.from_file(path)

    assert tree.deepest() == "button"


def test_missing_file(tmp_path):
    with pytest.raises(TreeConfigError, match="Could not read"):
        TreeConfig.from_file(tmp_path / "missing.ini")


def test_other_sections_ignored():
    tree = TreeConfig.from_string("[settings]\nfoo = bar\n\n[target:root]\n")
    assert list(tree.declared) == ["root"]


@pytest.mark.parametrize(
    "text, message",
    [
        ("", "No \\[target:<name>\\] sections"),
        ("[target:a]\nparent = b\n\n[target:b]\n", "not declared before"),
        ("[target:a]\ncolour = red\n", "Unknown keys"),
        ("[target: ]\n", "no target name"),
        ("[target:a]\n[target:a]\n", "Could not parse"),
        ("parent = a\n", "Could not parse"),
    ],
)
def test_malformed_configs(text, message):
    with pytest.raises(TreeConfigError, match=message):
        TreeConfig.from_string(text)


def test_duplicate_target_names():
    decl = TargetDecl("a", None, (), (), ())
    with pytest.raises(TreeConfigError, match="declared twice"):
        TreeConfig([decl, decl])


def test_tree_config_error_is_value_error():
    with pytest.raises(ValueError):
        TreeConfig.from_string("")


def test_percent_signs_are_literal():
    tree = TreeConfig.from_string("[target:a]\nhandlers = 100%\ncapture = %(bubble)s\n")

    assert tree.declared["a"].handlers == ("100%",)
    assert tree.declared["a"].capture == ("%(bubble)s",)

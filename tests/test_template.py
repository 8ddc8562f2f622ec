"""Tests for autorun template rendering."""

import pytest

from daemonforge.autorun.template import (
    build_replacements,
    leftover_placeholders,
    render,
    substitute,
)
from daemonforge.drivers.linux import INIT_REPLACEMENTS
from daemonforge.errors import RenderError

FIELDS = {
    "appName": "myd",
    "appExecutable": "myd.sh",
    "appDescription": "test",
    "appDir": "/opt/myd",
    "authorName": "A",
    "authorEmail": "a@x.com",
}


class TestSubstitute:
    def test_replaces_every_occurrence(self):
        assert substitute("@x@ and @x@", {"@x@": "1"}) == "1 and 1"

    def test_replaced_text_is_not_rescanned(self):
        result = substitute("@a@ @b@", {"@a@": "@b@", "@b@": "B"})
        assert result == "@b@ B"

    def test_longest_token_wins(self):
        result = substitute("@bin_file@", {"@bin@": "X", "@bin_file@": "/opt/app"})
        assert result == "/opt/app"

    def test_no_tokens(self):
        assert substitute("unchanged", {}) == "unchanged"


class TestBuildReplacements:
    def test_descriptor_fields_become_tokens(self):
        replacements = build_replacements({"appName": "myd"})
        assert replacements == {"{{appName}}": "myd"}

    def test_driver_values_expand_descriptor_fields(self):
        replacements = build_replacements(FIELDS, INIT_REPLACEMENTS)
        assert replacements["@bin_file@"] == "/opt/myd/myd.sh"
        assert replacements["@name@"] == "myd"
        assert replacements["@author_email@"] == "a@x.com"


class TestRender:
    def test_scenario_template(self):
        template = b"#!/bin/sh\n# {{appDescription}} by {{authorName}}\nexec {{appDir}}/{{appExecutable}}"
        assert render(template, FIELDS) == b"#!/bin/sh\n# test by A\nexec /opt/myd/myd.sh"

    def test_every_registered_placeholder_replaced_once_per_occurrence(self):
        tokens = ["{{" + name + "}}" for name in FIELDS] + list(INIT_REPLACEMENTS)
        template = "\n".join(f"{t}|{t}" for t in tokens).encode()

        lines = render(template, FIELDS, INIT_REPLACEMENTS).decode().splitlines()

        expected = build_replacements(FIELDS, INIT_REPLACEMENTS)
        assert len(lines) == len(tokens)
        for token, line in zip(tokens, lines):
            assert line == f"{expected[token]}|{expected[token]}"

    def test_values_containing_tokens_are_left_alone(self):
        fields = dict(FIELDS, appDescription="uses @name@ literally")
        result = render(b"@desc@", fields, INIT_REPLACEMENTS)
        assert result == b"uses @name@ literally"

    def test_unknown_placeholder_passes_through(self):
        result = render(b"{{appName}} {{unknown}}", FIELDS)
        assert result == b"myd {{unknown}}"

    def test_unknown_placeholder_strict_raises(self):
        with pytest.raises(RenderError, match="unknown"):
            render(b"{{appName}} {{unknown}}", FIELDS, strict=True)

    def test_unknown_placeholder_in_driver_value_strict_raises(self):
        with pytest.raises(RenderError, match="pidDir"):
            render(b"@pid@", FIELDS, {"@pid@": "{{pidDir}}/app.pid"}, strict=True)

    def test_unused_driver_value_is_not_checked(self):
        assert render(b"plain", FIELDS, {"@pid@": "{{pidDir}}"}, strict=True) == b"plain"

    def test_invalid_utf8_raises(self):
        with pytest.raises(RenderError, match="UTF-8"):
            render(b"\xff\xfe{{appName}}", FIELDS)


def test_leftover_placeholders_distinct_in_order():
    assert leftover_placeholders("{{b}} {{a}} {{b}} {{ c }}") == ["{{b}}", "{{a}}", "{{ c }}"]

"""YAML document adapter for pnpm-lock.yaml.

The decoder and encoder never talk to PyYAML directly; they go through
``parse_document`` and ``serialize_document`` so the scalar typing rules live
in one place:

- plain scalars that YAML 1.1 would type as int, float or timestamp are kept
  as their source text. ``1.0`` and ``1.10`` are versions, not numbers.
- only ``true`` and ``false`` are booleans; ``yes``, ``no``, ``on`` and
  ``off`` are package names.
- plain scalars in flow mappings may contain ``?``, which pnpm writes
  unquoted in tarball URLs (``{tarball: path/to/tarball?foo=bar}``).
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

import yaml
from yaml.composer import Composer
from yaml.constructor import SafeConstructor
from yaml.parser import Parser
from yaml.reader import Reader
from yaml.resolver import Resolver
from yaml.scanner import Scanner
from yaml.tokens import ScalarToken

_BREAKS = "\0 \t\r\n\x85\u2028\u2029"


class FlowMapping(dict):
    """Mapping emitted in flow style, e.g. ``resolution: {integrity: ...}``."""


class PlainScalar(str):
    """String emitted without quotes even when it reads back as a number."""


class LockfileScanner(Scanner):
    """Scanner that accepts ``?`` inside plain scalars of flow collections."""

    def scan_plain(self):
        # Same as PyYAML's scan_plain, except that only ',[]{}' terminate a
        # plain scalar in the flow context.
        chunks = []
        start_mark = self.get_mark()
        end_mark = start_mark
        indent = self.indent + 1
        spaces = []
        while True:
            length = 0
            if self.peek() == "#":
                break
            while True:
                ch = self.peek(length)
                if (
                    ch in _BREAKS
                    or (
                        ch == ":"
                        and self.peek(length + 1) in _BREAKS + (",[]{}" if self.flow_level else "")
                    )
                    or (self.flow_level and ch in ",[]{}")
                ):
                    break
                length += 1
            if length == 0:
                break
            self.allow_simple_key = False
            chunks.extend(spaces)
            chunks.append(self.prefix(length))
            self.forward(length)
            end_mark = self.get_mark()
            spaces = self.scan_plain_spaces(indent, start_mark)
            if (
                not spaces
                or self.peek() == "#"
                or (not self.flow_level and self.column < indent)
            ):
                break
        return ScalarToken("".join(chunks), True, start_mark, end_mark)


class LockfileLoader(Reader, LockfileScanner, Parser, Composer, SafeConstructor, Resolver):
    """Safe loader with the scalar rules described in the module docstring."""

    def __init__(self, stream):
        Reader.__init__(self, stream)
        LockfileScanner.__init__(self)
        Parser.__init__(self)
        Composer.__init__(self)
        SafeConstructor.__init__(self)
        Resolver.__init__(self)


def _construct_raw_scalar(loader: LockfileLoader, node: yaml.ScalarNode) -> str:
    return loader.construct_scalar(node)


for _tag in (
    "tag:yaml.org,2002:int",
    "tag:yaml.org,2002:float",
    "tag:yaml.org,2002:timestamp",
):
    LockfileLoader.add_constructor(_tag, _construct_raw_scalar)

# YAML 1.2 booleans only: package names such as "yes", "on" or "off" stay strings.
_BOOL_TAG = "tag:yaml.org,2002:bool"
LockfileLoader.yaml_implicit_resolvers = {
    key: [(tag, regexp) for tag, regexp in values if tag != _BOOL_TAG]
    for key, values in Resolver.yaml_implicit_resolvers.items()
}
LockfileLoader.add_implicit_resolver(
    _BOOL_TAG, re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"), list("tTfF")
)


class LockfileDumper(yaml.SafeDumper):
    """Safe dumper producing pnpm-style block YAML."""

    def increase_indent(self, flow=False, indentless=False):
        # pnpm indents sequences under their key ("key:\n  - item").
        return super().increase_indent(flow, False)

    def ignore_aliases(self, data):
        return True


def _represent_flow_mapping(dumper: LockfileDumper, data: FlowMapping) -> yaml.Node:
    return dumper.represent_mapping("tag:yaml.org,2002:map", data, flow_style=True)


def _represent_plain_scalar(dumper: LockfileDumper, data: PlainScalar) -> yaml.Node:
    value = str(data)
    tag = dumper.resolve(yaml.ScalarNode, value, (True, False))
    return dumper.represent_scalar(tag, value)


LockfileDumper.add_representer(FlowMapping, _represent_flow_mapping)
LockfileDumper.add_representer(PlainScalar, _represent_plain_scalar)


def parse_document(content: bytes | str) -> Any:
    """Parse YAML content into plain Python values.

    Raises:
        yaml.YAMLError: If the content is not valid YAML.
    """
    return yaml.load(content, Loader=LockfileLoader)


def serialize_document(document: Mapping[str, Any]) -> bytes:
    """Serialize a mapping to UTF-8 YAML, keeping the mapping's key order."""
    text = yaml.dump(
        document,
        Dumper=LockfileDumper,
        sort_keys=False,
        default_flow_style=False,
        allow_unicode=True,
        width=float("inf"),
    )
    return text.encode("utf-8")


def force_str(value: Any) -> str:
    """Coerce a scalar read from the document to its string form."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)

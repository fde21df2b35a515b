# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Identifier mapping: schema names to type and field identifiers.

Type identifiers are PascalCase, field identifiers snake_case. Field
identifiers that collide with a reserved word of the target language are
escaped with the target's marker (``type`` -> ``type_`` for Python,
``r#type`` for Rust), never renamed to something else.
"""

from __future__ import annotations

import keyword
from dataclasses import dataclass

SEPARATORS = "_-"


@dataclass(frozen=True)
class KeywordPolicy:
    """Reserved words of a target language and how to escape them.

    Attributes:
        keywords: Identifiers that must be escaped.
        prefix: Raw-identifier marker put in front (e.g. ``r#``).
        suffix: Marker appended when there is no prefix.
        unescapable: Keywords the prefix cannot be applied to; these
            always get a trailing underscore.
    """

    keywords: frozenset[str]
    prefix: str = ""
    suffix: str = "_"
    unescapable: frozenset[str] = frozenset()

    def escape(self, ident: str) -> str:
        if ident not in self.keywords:
            return ident
        if self.prefix and ident not in self.unescapable:
            return f"{self.prefix}{ident}"
        return f"{ident}{self.suffix or '_'}"


PYTHON_KEYWORDS = KeywordPolicy(
    keywords=frozenset(keyword.kwlist) | frozenset(keyword.softkwlist) | {"type"},
    suffix="_",
)

RUST_KEYWORDS = KeywordPolicy(
    keywords=frozenset(
        """as async await break const continue crate dyn else enum extern false fn
        for if impl in let loop match mod move mut pub ref return self Self static
        struct super trait true type unsafe use where while abstract become box do
        final gen macro override priv try typeof unsized virtual yield""".split()
    ),
    prefix="r#",
    unescapable=frozenset({"self", "Self", "super", "crate"}),
)


def _needs_split(raw: str) -> bool:
    """True for separated names, foreign characters, and all-caps names."""
    if any(c in SEPARATORS or not c.isalnum() for c in raw):
        return True
    return not any(c.isalpha() and not c.isupper() for c in raw)


def _join_words(raw: str) -> str:
    out: list[str] = []
    capitalize_next = True
    for c in raw:
        if c in SEPARATORS or not c.isalnum():
            capitalize_next = True
        elif c.isascii():
            out.append(c.upper() if capitalize_next else c.lower())
            capitalize_next = False
    return "".join(out)


def to_type_identifier(raw: str) -> str:
    """Map a schema name to a PascalCase type identifier.

    ``some_name`` -> ``SomeName``, ``NMTOKEN`` -> ``Nmtoken``,
    ``PurchaseOrder`` is kept, ``person`` -> ``Person``.
    The rule is reapplied until the result is stable.
    """
    current = raw
    while True:
        if _needs_split(current):
            following = _join_words(current)
        else:
            following = current[:1].upper() + current[1:]
        if following == current:
            return current
        current = following


def nested_type_identifier(owner: str, child: str) -> str:
    """Name of an anonymous type owned by ``child`` inside ``owner``.

    ``owner`` is an already resolved identifier and keeps its capitals:
    ``PurchaseOrder`` + ``shipTo`` -> ``PurchaseOrderShipTo``.
    """
    return to_type_identifier(owner + to_type_identifier(child))


def to_field_identifier(raw: str, policy: KeywordPolicy = PYTHON_KEYWORDS) -> str:
    """Map a schema name to a snake_case field identifier.

    ``SomeName`` -> ``some_name``, ``item-count`` -> ``item_count``,
    ``type`` -> ``type_`` (or ``r#type`` with RUST_KEYWORDS).
    """
    out: list[str] = []
    prev = ""
    for c in raw:
        if c.isupper():
            if prev and not prev.isupper() and prev not in SEPARATORS:
                out.append("_")
            out.append(c.lower())
        elif c.isalnum():
            out.append(c)
        else:
            out.append("_")
        prev = c
    return policy.escape("".join(out))

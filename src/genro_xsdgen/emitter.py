# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Type emission engine.

Walks a Schema tree depth-first and appends one definition per type to an
OutputBuffer. For every complex type the struct is emitted first, then the
anonymous types owned by its attributes and elements (attributes first), so
a struct refers to nested types that appear after it in the buffer.

Walk order of emit_schema: named complex types, named simple types, then
top-level elements, each in document order. Any EmissionError aborts the
whole run; the buffer reached so far is attached to the error as
``partial``. Only visited nodes are checked: the inline type of a
prohibited attribute and top-level elements left out by ``roots`` are
never walked, so an xs:choice inside them does not abort the run.

Example:
    >>> emitter = TypeEmitter()
    >>> buffer = emitter.emit_schema(schema)
    >>> [d.name for d in buffer]
    ['Person', 'PersonAddress']
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from .cardinality import (
    Cardinality,
    attribute_cardinality,
    element_cardinality,
    propagate_group_min_occurs,
)
from .definitions import TEXT_WIRE_NAME, FieldDef, OutputBuffer, StructDef, WireRole
from .enumerations import VALUE_FIELD, emit_simple_type
from .errors import (
    EmissionError,
    MissingNameError,
    NameCollisionError,
    UnsupportedConstructError,
)
from .naming import (
    PYTHON_KEYWORDS,
    KeywordPolicy,
    nested_type_identifier,
    to_field_identifier,
    to_type_identifier,
)
from .primitives import FieldType, ScalarType, resolve_type
from .schema import (
    Attribute,
    Choice,
    ComplexType,
    Element,
    Group,
    InlineComplex,
    InlineSimple,
    Schema,
    SimpleContentExtension,
    SimpleType,
    TypeReference,
    TypeSource,
    Use,
)

logger = logging.getLogger(__name__)


def _join(path: str, segment: str) -> str:
    return f"{path}/{segment}" if path else segment


class TypeEmitter:
    """Emit type definitions for a Schema tree.

    Args:
        policy: Reserved words of the target language, used to escape
            field and variant identifiers.
    """

    def __init__(self, policy: KeywordPolicy = PYTHON_KEYWORDS):
        self.policy = policy

    # -------------------------------------------------------------------------
    # Entry point
    # -------------------------------------------------------------------------

    def emit_schema(
        self, schema: Schema, roots: Iterable[str] | None = None
    ) -> OutputBuffer:
        """Emit every top-level type of ``schema`` into a fresh buffer.

        Args:
            schema: The tree to emit.
            roots: Optional names of the top-level elements to emit.
                If None, all top-level elements are emitted.

        Raises:
            EmissionError: on the first unsupported or inconsistent node.
        """
        buffer = OutputBuffer()
        try:
            for complex_type in schema.complex_types:
                if not complex_type.name:
                    raise UnsupportedConstructError(
                        "Anonymous top-level complexType has no owner to name it",
                        "complexType",
                    )
                self.emit_complex(complex_type, buffer)
            for simple_type in schema.simple_types:
                if not simple_type.name:
                    raise UnsupportedConstructError(
                        "Anonymous top-level simpleType has no owner to name it",
                        "simpleType",
                    )
                self.emit_simple(simple_type, buffer)
            for element in self._select_roots(schema.elements, roots):
                self.emit_element(element, buffer)
        except EmissionError as exc:
            exc.partial = buffer
            raise
        return buffer

    def _select_roots(
        self, elements: list[Element], roots: Iterable[str] | None
    ) -> list[Element]:
        if roots is None:
            return list(elements)
        by_name = {element.name: element for element in elements}
        selected = []
        for root in roots:
            if root not in by_name:
                raise UnsupportedConstructError(
                    f"Root element '{root}' is not a top-level element of the schema",
                    f"element[{root}]",
                )
            selected.append(by_name[root])
        return selected

    # -------------------------------------------------------------------------
    # Node emission
    # -------------------------------------------------------------------------

    def emit_element(self, element: Element, buffer: OutputBuffer, path: str = "") -> None:
        """Emit the inline type of a top-level element, named after it.

        A bare element (type reference or no type) emits nothing.
        """
        path = _join(path, f"element[{element.name}]")
        source = element.type
        if isinstance(source, InlineComplex):
            self.emit_complex(
                source.complex_type, buffer, element.name, element.name, path
            )
        elif isinstance(source, InlineSimple):
            self.emit_simple(
                source.simple_type, buffer, element.name, element.name, path
            )

    def emit_complex(
        self,
        complex_type: ComplexType,
        buffer: OutputBuffer,
        name: str | None = None,
        wire_name: str | None = None,
        path: str = "",
    ) -> None:
        """Emit the struct for ``complex_type`` and then its nested types.

        Args:
            complex_type: The type to emit.
            buffer: Destination buffer.
            name: Name assigned by the owner; required for anonymous types.
            wire_name: Markup name of the struct, defaults to the raw name.
            path: Location of the owner, for error reporting.
        """
        raw = name if name is not None else complex_type.name
        path = _join(
            path, f"complexType[{complex_type.name}]" if complex_type.name else "complexType"
        )
        if not raw:
            raise MissingNameError("complexType has no name assigned", path)
        ident = to_type_identifier(raw)

        content = complex_type.content
        if isinstance(content, Choice):
            raise UnsupportedConstructError(
                f"xs:choice content in '{raw}' is not supported", path
            )

        attributes = list(complex_type.attributes)
        elements: list[tuple[Element, int | None]] = []
        text_type: FieldType | None = None
        if isinstance(content, Group):
            elements = propagate_group_min_occurs(content)
        elif isinstance(content, SimpleContentExtension):
            attributes.extend(content.attributes)
            text_type = resolve_type(content.base)

        struct = StructDef(ident, wire_name or raw)
        for attr in attributes:
            cardinality = attribute_cardinality(attr)
            if cardinality is None:
                continue
            self._add_field(
                struct,
                attr.name,
                WireRole.ATTRIBUTE,
                self._value_type(attr.type, ident, attr.name),
                cardinality,
                path,
            )
        for element, min_occurs in elements:
            self._add_field(
                struct,
                element.name,
                WireRole.ELEMENT,
                self._value_type(element.type, ident, element.name),
                element_cardinality(min_occurs, element.max_occurs),
                path,
            )
        if text_type is not None:
            self._add_field(
                struct, TEXT_WIRE_NAME, WireRole.TEXT, text_type, Cardinality.REQUIRED, path
            )

        buffer.add(struct, path)
        logger.debug("Emitted struct %s with %d fields", ident, len(struct.fields))

        for attr in attributes:
            self.emit_attribute(ident, attr, buffer, path)
        for element, _ in elements:
            self._emit_nested(
                ident, element.name, element.type, buffer, _join(path, f"element[{element.name}]")
            )

    def emit_simple(
        self,
        simple_type: SimpleType,
        buffer: OutputBuffer,
        name: str | None = None,
        wire_name: str | None = None,
        path: str = "",
    ) -> None:
        """Emit an alias, or an enum plus its wrapper struct."""
        raw = name if name is not None else simple_type.name
        path = _join(
            path, f"simpleType[{simple_type.name}]" if simple_type.name else "simpleType"
        )
        if not raw:
            raise MissingNameError("simpleType has no name assigned", path)
        emit_simple_type(
            simple_type,
            to_type_identifier(raw),
            buffer,
            wire_name=wire_name or raw,
            policy=self.policy,
            path=path,
        )

    def emit_attribute(
        self, owner: str, attr: Attribute, buffer: OutputBuffer, path: str = ""
    ) -> None:
        """Emit the inline type of ``attr`` as ``<owner>_<attribute>``."""
        if attr.use is Use.PROHIBITED:
            return
        self._emit_nested(
            owner, attr.name, attr.type, buffer, _join(path, f"attribute[{attr.name}]")
        )

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _emit_nested(
        self,
        owner: str,
        child: str,
        source: TypeSource,
        buffer: OutputBuffer,
        path: str,
    ) -> None:
        if isinstance(source, InlineComplex):
            self.emit_complex(
                source.complex_type, buffer, nested_type_identifier(owner, child), child, path
            )
        elif isinstance(source, InlineSimple):
            self.emit_simple(
                source.simple_type, buffer, nested_type_identifier(owner, child), child, path
            )

    def _value_type(self, source: TypeSource, owner: str, child: str) -> FieldType:
        if isinstance(source, TypeReference):
            return resolve_type(source.name)
        if isinstance(source, (InlineComplex, InlineSimple)):
            return nested_type_identifier(owner, child)
        return ScalarType.STRING

    def _add_field(
        self,
        struct: StructDef,
        wire_name: str,
        role: WireRole,
        field_type: FieldType,
        cardinality: Cardinality,
        path: str,
    ) -> None:
        if role is WireRole.TEXT:
            ident = VALUE_FIELD
        else:
            ident = to_field_identifier(wire_name, self.policy)
        for existing in struct.fields:
            if existing.ident == ident:
                raise NameCollisionError(
                    f"Fields '{existing.wire_name}' and '{wire_name}' of {struct.name} "
                    f"both map to '{ident}'",
                    path,
                )
        struct.fields.append(FieldDef(ident, wire_name, role, field_type, cardinality))

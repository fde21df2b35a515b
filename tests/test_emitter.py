# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the type emission engine."""

import pytest

from genro_xsdgen.cardinality import Cardinality
from genro_xsdgen.definitions import AliasDef, EnumDef, OutputBuffer, StructDef, WireRole
from genro_xsdgen.emitter import TypeEmitter
from genro_xsdgen.errors import (
    MissingNameError,
    NameCollisionError,
    UnsupportedConstructError,
)
from genro_xsdgen.naming import RUST_KEYWORDS
from genro_xsdgen.primitives import ScalarType
from genro_xsdgen.schema import (
    All,
    Attribute,
    Choice,
    ComplexType,
    Element,
    InlineComplex,
    InlineSimple,
    Restriction,
    Schema,
    Sequence,
    SimpleContentExtension,
    SimpleType,
    TypeReference,
    Use,
)


def _fields(struct):
    return [(f.ident, f.wire_name, f.role, f.type, f.cardinality) for f in struct.fields]


# =============================================================================
# Structs
# =============================================================================


class TestComplexType:
    """Tests for struct emission."""

    def test_person_end_to_end(self, person_type):
        """Person emits exactly one struct: id, name, age."""
        buffer = TypeEmitter().emit_schema(Schema(complex_types=[person_type]))

        assert buffer.names() == ["Person"]
        assert _fields(buffer["Person"]) == [
            ("id", "id", WireRole.ATTRIBUTE, ScalarType.STRING, Cardinality.REQUIRED),
            ("name", "name", WireRole.ELEMENT, ScalarType.STRING, Cardinality.REQUIRED),
            ("age", "age", WireRole.ELEMENT, ScalarType.INT32, Cardinality.OPTIONAL),
        ]

    def test_all_group(self):
        ct = ComplexType("Pair", All([Element("left"), Element("right")]))

        buffer = OutputBuffer()
        TypeEmitter().emit_complex(ct, buffer)

        assert [f.ident for f in buffer["Pair"].fields] == ["left", "right"]

    def test_element_without_type_is_string(self):
        ct = ComplexType("Note", Sequence([Element("body")]))

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert buffer["Note"].fields[0].type is ScalarType.STRING

    def test_attribute_without_type_is_string(self):
        ct = ComplexType("Note", attributes=[Attribute("lang")])

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        [field_def] = buffer["Note"].fields
        assert field_def.type is ScalarType.STRING
        assert field_def.cardinality is Cardinality.OPTIONAL

    def test_unbounded_element(self):
        ct = ComplexType(
            "Order",
            Sequence([Element("item", TypeReference("Item"), min_occurs=1, max_occurs="unbounded")]),
        )

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        [field_def] = buffer["Order"].fields
        assert field_def.type == "Item"
        assert field_def.cardinality is Cardinality.REPEATED

    def test_no_content_model_keeps_attributes(self):
        ct = ComplexType("Marker", attributes=[Attribute("id", use=Use.REQUIRED)])

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert [f.role for f in buffer["Marker"].fields] == [WireRole.ATTRIBUTE]

    def test_empty_struct(self):
        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ComplexType("Empty")]))

        assert buffer["Empty"].fields == []

    def test_group_min_occurs_is_applied(self):
        ct = ComplexType(
            "Box",
            Sequence([Element("a"), Element("b", min_occurs=0)], min_occurs=2),
        )

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert [f.cardinality for f in buffer["Box"].fields] == [
            Cardinality.REQUIRED,
            Cardinality.OPTIONAL,
        ]

    def test_optional_group_makes_children_optional(self):
        ct = ComplexType("Box", Sequence([Element("a")], min_occurs=0))

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert buffer["Box"].fields[0].cardinality is Cardinality.OPTIONAL

    def test_reserved_field_name(self):
        ct = ComplexType("Item", Sequence([Element("type")]))

        python = TypeEmitter().emit_schema(Schema(complex_types=[ct]))
        rust = TypeEmitter(RUST_KEYWORDS).emit_schema(Schema(complex_types=[ct]))

        assert python["Item"].fields[0].ident == "type_"
        assert rust["Item"].fields[0].ident == "r#type"
        assert python["Item"].fields[0].wire_name == "type"

    def test_wire_name_is_raw_schema_name(self):
        ct = ComplexType("Doc", Sequence([Element("CreationDate")]))

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        field_def = buffer["Doc"].fields[0]
        assert field_def.ident == "creation_date"
        assert field_def.wire_name == "CreationDate"


# =============================================================================
# Prohibited attributes
# =============================================================================


class TestProhibitedAttribute:
    """A prohibited attribute never produces anything."""

    def test_field_is_skipped(self):
        ct = ComplexType(
            "Thing",
            Sequence([Element("name")]),
            attributes=[
                Attribute("secret", TypeReference("xs:string"), Use.PROHIBITED),
                Attribute("id", TypeReference("xs:string"), Use.REQUIRED),
            ],
        )

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert [f.wire_name for f in buffer["Thing"].fields] == ["id", "name"]

    def test_inline_type_is_not_emitted(self):
        inline = SimpleType(restriction=Restriction("xs:string", ["A", "B"]))
        ct = ComplexType(
            "Thing",
            attributes=[Attribute("secret", InlineSimple(inline), Use.PROHIBITED)],
        )

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert buffer.names() == ["Thing"]

    def test_prohibited_in_simple_content(self):
        ct = ComplexType(
            "Price",
            SimpleContentExtension(
                "xs:decimal",
                [Attribute("currency", use=Use.REQUIRED), Attribute("old", use=Use.PROHIBITED)],
            ),
        )

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert [f.wire_name for f in buffer["Price"].fields] == ["currency", "$text"]


# =============================================================================
# Simple content
# =============================================================================


class TestSimpleContent:
    """Tests for text-with-attributes types."""

    def test_text_field_follows_attributes(self):
        ct = ComplexType(
            "Price",
            SimpleContentExtension("xs:decimal", [Attribute("currency", use=Use.REQUIRED)]),
            attributes=[Attribute("source")],
        )

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert _fields(buffer["Price"]) == [
            ("source", "source", WireRole.ATTRIBUTE, ScalarType.STRING, Cardinality.OPTIONAL),
            ("currency", "currency", WireRole.ATTRIBUTE, ScalarType.STRING, Cardinality.REQUIRED),
            ("value", "$text", WireRole.TEXT, ScalarType.FLOAT64, Cardinality.REQUIRED),
        ]

    def test_text_of_named_type(self):
        ct = ComplexType("Tagged", SimpleContentExtension("code_type"))

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert buffer["Tagged"].fields[0].type == "CodeType"

    def test_attribute_named_value_collides_with_text(self):
        ct = ComplexType("Bad", SimpleContentExtension("xs:string", [Attribute("value")]))

        with pytest.raises(NameCollisionError):
            TypeEmitter().emit_schema(Schema(complex_types=[ct]))


# =============================================================================
# Nested anonymous types
# =============================================================================


class TestNestedTypes:
    """Tests for anonymous types owned by elements and attributes."""

    def test_nested_complex_is_prefixed_and_follows_owner(self):
        address = ComplexType(content=Sequence([Element("street")]))
        ct = ComplexType("Person", Sequence([Element("address", InlineComplex(address))]))

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert buffer.names() == ["Person", "PersonAddress"]
        assert buffer["Person"].fields[0].type == "PersonAddress"
        assert buffer["PersonAddress"].wire_name == "address"

    def test_same_child_name_in_two_parents(self):
        def owner(name):
            address = ComplexType(content=Sequence([Element("street")]))
            return ComplexType(name, Sequence([Element("address", InlineComplex(address))]))

        buffer = TypeEmitter().emit_schema(
            Schema(complex_types=[owner("Person"), owner("Company")])
        )

        assert buffer.names() == ["Person", "PersonAddress", "Company", "CompanyAddress"]

    def test_attributes_before_elements_depth_first(self):
        inner = ComplexType(content=Sequence([Element("deep", InlineSimple(SimpleType()))]))
        ct = ComplexType(
            "Root",
            Sequence([Element("child", InlineComplex(inner))]),
            attributes=[Attribute("kind", InlineSimple(SimpleType(restriction=Restriction("xs:string", ["A"]))))],
        )

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert buffer.names() == [
            "Root",
            "RootKindEnum",
            "RootKind",
            "RootChild",
            "RootChildDeep",
        ]

    def test_attribute_inline_type_name(self):
        inline = SimpleType(restriction=Restriction("xs:int"))
        ct = ComplexType("Cell", attributes=[Attribute("span", InlineSimple(inline), Use.REQUIRED)])

        buffer = TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert buffer["Cell"].fields[0].type == "CellSpan"
        assert buffer["CellSpan"] == AliasDef("CellSpan", ScalarType.INT32)

    def test_emit_attribute_directly(self):
        attr = Attribute("unit", InlineSimple(SimpleType(restriction=Restriction("xs:string", ["Kg", "Lb"]))))

        buffer = OutputBuffer()
        TypeEmitter().emit_attribute("Weight", attr, buffer)

        assert buffer.names() == ["WeightUnitEnum", "WeightUnit"]


# =============================================================================
# Top-level elements and simple types
# =============================================================================


class TestTopLevel:
    """Tests for the top-level walk."""

    def test_element_with_inline_type_takes_its_name(self):
        element = Element("invoice", InlineComplex(ComplexType(content=Sequence([Element("total")]))))

        buffer = TypeEmitter().emit_schema(Schema(elements=[element]))

        assert buffer.names() == ["Invoice"]
        assert buffer["Invoice"].wire_name == "invoice"

    def test_bare_element_emits_nothing(self):
        schema = Schema(elements=[Element("note", TypeReference("xs:string")), Element("other")])

        buffer = TypeEmitter().emit_schema(schema)

        assert len(buffer) == 0

    def test_named_simple_type(self):
        st = SimpleType("Color", Restriction("xs:string", ["Red", "Green", "Blue"]))

        buffer = TypeEmitter().emit_schema(Schema(simple_types=[st]))

        assert isinstance(buffer["ColorEnum"], EnumDef)
        assert isinstance(buffer["Color"], StructDef)

    def test_walk_order(self):
        schema = Schema(
            elements=[Element("doc", InlineComplex(ComplexType()))],
            complex_types=[ComplexType("Person")],
            simple_types=[SimpleType("Code")],
        )

        buffer = TypeEmitter().emit_schema(schema)

        assert buffer.names() == ["Person", "Code", "Doc"]

    def test_roots_filter_elements(self):
        schema = Schema(
            elements=[
                Element("a", InlineComplex(ComplexType())),
                Element("b", InlineComplex(ComplexType())),
            ]
        )

        buffer = TypeEmitter().emit_schema(schema, roots=["b"])

        assert buffer.names() == ["B"]

    def test_unknown_root(self):
        with pytest.raises(UnsupportedConstructError, match="missing"):
            TypeEmitter().emit_schema(Schema(), roots=["missing"])

    def test_output_is_deterministic(self, person_type):
        schema = Schema(complex_types=[person_type])

        first = TypeEmitter().emit_schema(schema)
        second = TypeEmitter().emit_schema(schema)

        assert list(first) == list(second)


# =============================================================================
# Fatal conditions
# =============================================================================


class TestFatalConditions:
    """Tests for conditions aborting the run."""

    def test_choice_aborts(self):
        ct = ComplexType("Shape", Choice([Element("circle"), Element("square")]))

        with pytest.raises(UnsupportedConstructError) as info:
            TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert info.value.path == "complexType[Shape]"

    def test_nested_choice_reports_path(self):
        inner = ComplexType(content=Choice([Element("x")]))
        ct = ComplexType("Order", Sequence([Element("items", InlineComplex(inner))]))

        with pytest.raises(UnsupportedConstructError) as info:
            TypeEmitter().emit_schema(Schema(complex_types=[ct]))

        assert info.value.path == "complexType[Order]/element[items]/complexType"

    def test_choice_stops_following_siblings(self):
        schema = Schema(
            complex_types=[
                ComplexType("First"),
                ComplexType("Shape", Choice([Element("circle")])),
                ComplexType("Last"),
            ]
        )

        with pytest.raises(UnsupportedConstructError) as info:
            TypeEmitter().emit_schema(schema)

        assert info.value.partial is not None
        assert info.value.partial.names() == ["First"]
        assert "Shape" not in info.value.partial
        assert "Last" not in info.value.partial

    def test_choice_in_skipped_subtree_is_not_visited(self):
        hidden = ComplexType(content=Choice([Element("x")]))
        ct = ComplexType(
            "Doc", attributes=[Attribute("old", InlineComplex(hidden), Use.PROHIBITED)]
        )
        schema = Schema(
            complex_types=[ct],
            elements=[
                Element("shape", InlineComplex(ComplexType(content=Choice([Element("c")])))),
                Element("box", InlineComplex(ComplexType())),
            ],
        )

        buffer = TypeEmitter().emit_schema(schema, roots=["box"])

        assert buffer.names() == ["Doc", "Box"]

    def test_anonymous_top_level_type(self):
        with pytest.raises(UnsupportedConstructError):
            TypeEmitter().emit_schema(Schema(complex_types=[ComplexType()]))

    def test_missing_name(self):
        with pytest.raises(MissingNameError):
            TypeEmitter().emit_complex(ComplexType(), OutputBuffer())
        with pytest.raises(MissingNameError):
            TypeEmitter().emit_simple(SimpleType(), OutputBuffer())

    def test_colliding_type_names(self):
        schema = Schema(complex_types=[ComplexType("some-name"), ComplexType("some_name")])

        with pytest.raises(NameCollisionError, match="SomeName"):
            TypeEmitter().emit_schema(schema)

    def test_colliding_field_names(self):
        ct = ComplexType(
            "Dup",
            Sequence([Element("id")]),
            attributes=[Attribute("id")],
        )

        with pytest.raises(NameCollisionError):
            TypeEmitter().emit_schema(Schema(complex_types=[ct]))

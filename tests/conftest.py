# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pytest configuration and fixtures."""

import sys
import types

import pytest

from genro_xsdgen.schema import (
    Attribute,
    ComplexType,
    Element,
    Sequence,
    TypeReference,
    Use,
)

PERSON_XSD = """\
<?xml version="1.0" encoding="UTF-8"?>
<xs:schema xmlns:xs="http://www.w3.org/2001/XMLSchema">
    <xs:complexType name="Person">
        <xs:sequence>
            <xs:element name="name" type="xs:string"/>
            <xs:element name="age" type="xs:int" minOccurs="0"/>
        </xs:sequence>
        <xs:attribute name="id" type="xs:string" use="required"/>
    </xs:complexType>
</xs:schema>
"""


@pytest.fixture
def person_type():
    """The Person complex type: required name, optional age, required id."""
    return ComplexType(
        name="Person",
        content=Sequence(
            [
                Element("name", TypeReference("xs:string")),
                Element("age", TypeReference("xs:int"), min_occurs=0),
            ]
        ),
        attributes=[Attribute("id", TypeReference("xs:string"), Use.REQUIRED)],
    )


@pytest.fixture
def person_xsd_file(tmp_path):
    """Write the Person schema to a file."""
    xsd_path = tmp_path / "person.xsd"
    xsd_path.write_text(PERSON_XSD)
    return xsd_path


@pytest.fixture
def load_module(monkeypatch):
    """Execute generated Python source as a registered module."""

    def _load(code, name="generated_models"):
        module = types.ModuleType(name)
        monkeypatch.setitem(sys.modules, name, module)
        exec(compile(code, f"<{name}>", "exec"), module.__dict__)
        return module

    return _load

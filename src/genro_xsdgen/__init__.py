# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""genro-xsdgen: typed definitions from XML Schema.

Turns an XSD type tree into Python dataclasses (or Rust serde structs)
whose fields are tagged with their wire role (attribute, element, text)
and their original schema name.

Example:
    >>> from genro_xsdgen import generate_file
    >>> code = generate_file('invoice.xsd')

    >>> from genro_xsdgen import TypeEmitter, read_schema
    >>> buffer = TypeEmitter().emit_schema(read_schema('invoice.xsd'))
"""

from genro_xsdgen.config import GeneratorConfig
from genro_xsdgen.emitter import TypeEmitter
from genro_xsdgen.errors import (
    EmissionError,
    MissingNameError,
    NameCollisionError,
    SchemaReadError,
    UnsupportedConstructError,
    XsdGenError,
)
from genro_xsdgen.generator import generate, generate_file
from genro_xsdgen.reader import XsdReader, read_schema

__version__ = "0.1.0"

__all__ = [
    "GeneratorConfig",
    "TypeEmitter",
    "XsdReader",
    "read_schema",
    "generate",
    "generate_file",
    "XsdGenError",
    "SchemaReadError",
    "EmissionError",
    "UnsupportedConstructError",
    "MissingNameError",
    "NameCollisionError",
]

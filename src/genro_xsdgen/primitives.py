# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Primitive type resolution: XSD builtin keywords to target scalars.

Type references carrying the ``xs:``/``xsd:`` prefix are looked up in
PRIMITIVE_MAP; unknown builtins fall back to STRING. Any other non-empty
reference names a generated type and is mapped through the identifier
mapper. Date/time types stay strings on purpose.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Union

from genro_toolbox import smartsplit

from .naming import to_type_identifier

logger = logging.getLogger(__name__)

PRIMITIVE_PREFIXES = ("xs", "xsd")


class ScalarType(Enum):
    STRING = "string"
    BOOLEAN = "boolean"
    FLOAT32 = "float32"
    FLOAT64 = "float64"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    UINT64 = "uint64"


# A resolved field type: a scalar, or the identifier of a generated type.
FieldType = Union[ScalarType, str]

PRIMITIVE_MAP: dict[str, ScalarType] = {
    "string": ScalarType.STRING,
    "normalizedString": ScalarType.STRING,
    "token": ScalarType.STRING,
    "language": ScalarType.STRING,
    "Name": ScalarType.STRING,
    "NMTOKEN": ScalarType.STRING,
    "anyURI": ScalarType.STRING,
    "boolean": ScalarType.BOOLEAN,
    "decimal": ScalarType.FLOAT64,
    "float": ScalarType.FLOAT32,
    "double": ScalarType.FLOAT64,
    "integer": ScalarType.INT64,
    "nonPositiveInteger": ScalarType.INT64,
    "negativeInteger": ScalarType.INT64,
    "long": ScalarType.INT64,
    "int": ScalarType.INT32,
    "short": ScalarType.INT16,
    "byte": ScalarType.INT8,
    "nonNegativeInteger": ScalarType.UINT64,
    "positiveInteger": ScalarType.UINT64,
    "unsignedLong": ScalarType.UINT64,
    "unsignedInt": ScalarType.UINT32,
    "unsignedShort": ScalarType.UINT16,
    "unsignedByte": ScalarType.UINT8,
    # date/time family is kept opaque
    "dateTime": ScalarType.STRING,
    "time": ScalarType.STRING,
    "date": ScalarType.STRING,
    "gYearMonth": ScalarType.STRING,
    "gYear": ScalarType.STRING,
    "gMonthDay": ScalarType.STRING,
    "gDay": ScalarType.STRING,
    "gMonth": ScalarType.STRING,
    "duration": ScalarType.STRING,
}


def split_qualified(type_ref: str) -> tuple[str | None, str]:
    """Split ``prefix:local`` into its parts; prefix is None when absent."""
    parts = smartsplit(type_ref, ":")
    if len(parts) == 2:
        return parts[0], parts[1]
    return None, type_ref


def resolve_primitive(keyword: str) -> ScalarType:
    """Look up a bare builtin keyword, falling back to STRING."""
    scalar = PRIMITIVE_MAP.get(keyword)
    if scalar is None:
        logger.debug("Unknown primitive %r, using string", keyword)
        return ScalarType.STRING
    return scalar


def resolve_type(type_ref: str | None) -> FieldType:
    """Resolve a type reference to a scalar or a generated type identifier."""
    if not type_ref:
        return ScalarType.STRING
    prefix, local = split_qualified(type_ref)
    if prefix in PRIMITIVE_PREFIXES:
        return resolve_primitive(local)
    return to_type_identifier(local)

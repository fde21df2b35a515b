# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised while reading schemas and emitting type definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .definitions import OutputBuffer


class XsdGenError(Exception):
    """Base class for all genro_xsdgen errors."""


class SchemaReadError(XsdGenError):
    """Raised when an XSD source cannot be loaded or turned into a schema tree."""


class EmissionError(XsdGenError):
    """A fatal condition that aborts a whole emission run.

    Attributes:
        path: Slash separated location of the offending node,
            e.g. ``complexType[Order]/element[items]/complexType``.
        partial: The OutputBuffer as it stood when the run aborted.
            Set by the top-level driver; useful for inspection only.
    """

    def __init__(self, message: str, path: str = ""):
        self.message = message
        self.path = path
        self.partial: OutputBuffer | None = None
        super().__init__(f"{message} (at {path})" if path else message)


class UnsupportedConstructError(EmissionError):
    """The schema uses a shape the engine does not model (e.g. xs:choice)."""


class MissingNameError(EmissionError):
    """A type reached the emitter without a name assigned by its owner."""


class NameCollisionError(EmissionError):
    """Two definitions, fields or variants resolve to the same identifier."""

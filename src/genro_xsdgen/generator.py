# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""High-level entry points: schema tree or XSD source in, source text out."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from .config import DEFAULT_TARGET, GeneratorConfig
from .emitter import TypeEmitter
from .reader import read_schema
from .schema import Schema
from .targets import get_target

logger = logging.getLogger(__name__)


def generate(
    schema: Schema,
    target: str = DEFAULT_TARGET,
    roots: Iterable[str] | None = None,
    header: bool = True,
) -> str:
    """Emit ``schema`` and render it for ``target``.

    Nothing is rendered when emission fails: the EmissionError propagates
    with the partial buffer attached.
    """
    renderer = get_target(target)
    buffer = TypeEmitter(renderer.policy).emit_schema(schema, roots)
    logger.debug("Rendering %d definitions as %s", len(buffer), renderer.name)
    return renderer.render(buffer, header=header)


def generate_file(source: str | Path, config: GeneratorConfig | None = None) -> str:
    """Read an XSD (path, URL or text) and generate code for it."""
    config = config or GeneratorConfig()
    schema = read_schema(source)
    logger.info(
        "Read %d elements, %d complex types, %d simple types",
        len(schema.elements),
        len(schema.complex_types),
        len(schema.simple_types),
    )
    return generate(schema, config.target, config.roots, config.header)

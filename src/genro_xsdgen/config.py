# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Generator settings."""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from genro_toolbox import smartsplit

from .targets import TARGETS

DEFAULT_TARGET = "python"


@dataclass(frozen=True)
class GeneratorConfig:
    """Settings of one generation run.

    Attributes:
        target: Output language, a key of TARGETS.
        roots: Names of the top-level elements to emit; None means all.
        header: Emit the target preamble (imports / use lines).
    """

    target: str = DEFAULT_TARGET
    roots: tuple[str, ...] | None = None
    header: bool = True

    def __post_init__(self) -> None:
        if self.target not in TARGETS:
            raise ValueError(
                f"Unknown target: {self.target} (choose from {', '.join(sorted(TARGETS))})"
            )

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> GeneratorConfig:
        roots = None
        if args.roots:
            roots = tuple(r.strip() for r in smartsplit(args.roots, ",") if r.strip())
        return cls(target=args.target, roots=roots or None, header=not args.no_header)

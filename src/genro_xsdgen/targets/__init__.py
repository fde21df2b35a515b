# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Output languages for generated type definitions.

Available targets:
    - **python**: dataclasses with xsdata-style metadata (default)
    - **rust**: serde structs for quick-xml
"""

from .base import Target
from .python import PythonTarget
from .rust import RustTarget

TARGETS: dict[str, Target] = {
    PythonTarget.name: PythonTarget(),
    RustTarget.name: RustTarget(),
}


def get_target(name: str) -> Target:
    """Return the registered target called ``name``."""
    try:
        return TARGETS[name]
    except KeyError:
        raise ValueError(
            f"Unknown target: {name} (choose from {', '.join(sorted(TARGETS))})"
        ) from None


__all__ = ["Target", "PythonTarget", "RustTarget", "TARGETS", "get_target"]

"""Layer tree advertised by a WMS GetCapabilities document."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator


@dataclass(frozen=True, slots=True)
class CapabilityLayer:
    name: str | None = None
    title: str | None = None
    max_scale_denominator: float | None = None
    layers: tuple[CapabilityLayer, ...] = ()


def walk_layers(layers: Iterable[CapabilityLayer]) -> Iterator[CapabilityLayer]:
    """Yield every layer of the tree in pre-order."""

    for layer in layers:
        yield layer
        yield from walk_layers(layer.layers)

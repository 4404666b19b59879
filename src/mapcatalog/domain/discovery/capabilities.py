"""Match candidate layer names against a server's GetCapabilities tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from mapcatalog.domain.model import walk_layers

from .events import LayerScaleFiltered

if TYPE_CHECKING:
    from collections.abc import Collection, Sequence

    from mapcatalog.domain.model import CapabilityLayer

log = getLogger(__name__)


@dataclass(slots=True)
class CapabilityMatch:
    """Layer names confirmed by one capabilities document."""

    included: set[str] = field(default_factory=set[str])
    events: list[LayerScaleFiltered] = field(default_factory=list[LayerScaleFiltered])


def match_capability_layers(
    layers: Sequence[CapabilityLayer],
    candidates: Collection[str | None],
    *,
    endpoint: str,
    minimum_max_scale_denominator: float | None = None,
) -> CapabilityMatch:
    """Return which ``candidates`` are advertised and usable at the required scale.

    A layer whose ``MaxScaleDenominator`` is below the threshold cannot be shown
    zoomed out far enough and is left out; a layer equal to the threshold passes.
    Any single passing occurrence of a name is enough to include it.
    """

    match = CapabilityMatch()
    for layer in walk_layers(layers):
        name = layer.name
        if not name or name not in candidates:
            continue
        ceiling = layer.max_scale_denominator
        if (
            minimum_max_scale_denominator is not None
            and ceiling is not None
            and ceiling < minimum_max_scale_denominator
        ):
            log.info(
                "Provider feedback: filtering out %s (%s) because its MaxScaleDenominator is %s",
                layer.title,
                name,
                ceiling,
            )
            match.events.append(
                LayerScaleFiltered(
                    endpoint=endpoint,
                    layer_name=name,
                    title=layer.title,
                    max_scale_denominator=ceiling,
                    minimum_max_scale_denominator=minimum_max_scale_denominator,
                )
            )
            continue
        match.included.add(name)
    return match

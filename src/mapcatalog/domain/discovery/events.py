"""Diagnostic events emitted while discovering a catalog.

Events are plain values returned next to the tree so callers can report provider
feedback (or assert on it) without scraping log output.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class RecordBlacklisted:
    title: str
    name: str | None = None


@dataclass(frozen=True, slots=True)
class GroupBlacklisted:
    group: str
    record: str


@dataclass(frozen=True, slots=True)
class LayerScaleFiltered:
    endpoint: str
    layer_name: str
    title: str | None
    max_scale_denominator: float
    minimum_max_scale_denominator: float


@dataclass(frozen=True, slots=True)
class CapabilitiesUnavailable:
    endpoint: str
    reason: str


@dataclass(frozen=True, slots=True)
class ResourceSkipped:
    record: str
    format: str
    reason: str


@dataclass(frozen=True, slots=True)
class BoundingBoxInvalid:
    record: str
    value: str


type DiagnosticEvent = (
    RecordBlacklisted
    | GroupBlacklisted
    | LayerScaleFiltered
    | CapabilitiesUnavailable
    | ResourceSkipped
    | BoundingBoxInvalid
)

"""
Format Detection
Ordered, independent structural checks over a decoded document.

Historical documents never declared their format reliably, so detection
looks at shape only (the canonical check additionally requires the current
schema version literal).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from .models import CANONICAL_SCHEMA_VERSION

CONFIDENT = 0.5
KEYED_GRAPH_ROOT = "ROOT"


class DocumentFormat(str, Enum):
    CANONICAL = "canonical"
    FLAT_LIST = "flat_list"
    KEYED_GRAPH = "keyed_graph"
    EMPTY = "empty"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Detection:
    """Outcome of one detector."""

    format: DocumentFormat
    confidence: float
    reason: str

    @property
    def is_confident(self) -> bool:
        return self.confidence >= CONFIDENT


Detector = Callable[[dict[str, Any]], Detection]


def detect_canonical(raw: dict[str, Any]) -> Detection:
    version = raw.get("schemaVersion", raw.get("version"))
    has_root = isinstance(raw.get("root"), dict)
    has_components = isinstance(raw.get("components"), dict)

    if version == CANONICAL_SCHEMA_VERSION and has_root and has_components:
        return Detection(DocumentFormat.CANONICAL, 1.0, f"schema version {version} with root and components")
    if has_root and has_components:
        return Detection(DocumentFormat.CANONICAL, 0.3, f"root and components present but version is {version!r}")
    return Detection(DocumentFormat.CANONICAL, 0.0, "no root/components maps")


def detect_flat_list(raw: dict[str, Any]) -> Detection:
    root = raw.get("root")
    if isinstance(raw.get("content"), list) and isinstance(root, dict) and "props" in root:
        return Detection(DocumentFormat.FLAT_LIST, 0.9, "content list with root props")
    if isinstance(raw.get("content"), list):
        return Detection(DocumentFormat.FLAT_LIST, 0.3, "content list without root props")
    return Detection(DocumentFormat.FLAT_LIST, 0.0, "no content list")


def detect_keyed_graph(raw: dict[str, Any]) -> Detection:
    root = raw.get(KEYED_GRAPH_ROOT)
    if not isinstance(root, dict):
        return Detection(DocumentFormat.KEYED_GRAPH, 0.0, f"no {KEYED_GRAPH_ROOT} node")
    type_descriptor = root.get("type")
    if isinstance(type_descriptor, dict) and isinstance(type_descriptor.get("resolvedName"), str):
        return Detection(
            DocumentFormat.KEYED_GRAPH, 0.95, f"{KEYED_GRAPH_ROOT} resolves to {type_descriptor['resolvedName']}"
        )
    return Detection(DocumentFormat.KEYED_GRAPH, 0.2, f"{KEYED_GRAPH_ROOT} node without resolvable type")


DETECTORS: tuple[Detector, ...] = (detect_canonical, detect_flat_list, detect_keyed_graph)


def detect_format(raw: dict[str, Any], detectors: tuple[Detector, ...] = DETECTORS) -> Detection:
    """
    Run detectors in priority order; the first confident match wins.

    When none is confident the result is ``UNKNOWN`` carrying the reason of
    the closest candidate.
    """
    best: Detection | None = None
    for detector in detectors:
        detection = detector(raw)
        if detection.is_confident:
            return detection
        if best is None or detection.confidence > best.confidence:
            best = detection

    reason = best.reason if best is not None and best.confidence > 0 else "no known document shape"
    return Detection(DocumentFormat.UNKNOWN, 0.0, reason)

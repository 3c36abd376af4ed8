"""
Page documents.

Canonical schema models, legacy format detection and migration into the
canonical schema.
"""

from .models import (
    CANONICAL_SCHEMA_VERSION,
    DEFAULT_TITLE,
    ROOT_ID,
    ROOT_TYPE,
    CanonicalDocument,
    Node,
    RootNode,
    StateOverrides,
    TransitionSettings,
    create_empty_document,
)
from .detect import DETECTORS, Detection, DocumentFormat, detect_format
from .legacy import (
    DEFAULT_COMPONENT_MAPPINGS,
    LEGACY_TYPE_NAMES,
    ComponentMapping,
    canonical_type_name,
    coerce_responsive,
    get_mapping_for_type,
    supported_legacy_types,
)
from .migrator import (
    DocumentMigrator,
    MigrationError,
    MigrationReport,
    MigrationResult,
    migrate,
    normalize,
)

__all__ = [
    # Models
    "CANONICAL_SCHEMA_VERSION",
    "DEFAULT_TITLE",
    "ROOT_ID",
    "ROOT_TYPE",
    "CanonicalDocument",
    "Node",
    "RootNode",
    "StateOverrides",
    "TransitionSettings",
    "create_empty_document",
    # Detection
    "DETECTORS",
    "Detection",
    "DocumentFormat",
    "detect_format",
    # Legacy mappings
    "DEFAULT_COMPONENT_MAPPINGS",
    "LEGACY_TYPE_NAMES",
    "ComponentMapping",
    "canonical_type_name",
    "coerce_responsive",
    "get_mapping_for_type",
    "supported_legacy_types",
    # Migration
    "DocumentMigrator",
    "MigrationError",
    "MigrationReport",
    "MigrationResult",
    "migrate",
    "normalize",
]

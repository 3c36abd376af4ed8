"""
Document Migrator
Normalizes any stored page document into the canonical schema.

``normalize`` never raises: unparseable, oversized or unrecognised input
degrades to an empty canonical document and the problem is recorded as a
diagnostic. Only ``DocumentMigrator.migrate`` in strict mode raises
(``MigrationError``) for unmapped legacy component types.
"""

from dataclasses import dataclass, field
from typing import Any, Iterable

from pydantic import ValidationError as PydanticValidationError
from returns.result import Failure

from core import (
    Code,
    Diagnostics,
    JSONParseError,
    Settings,
    extract_json,
    get_logger,
    get_settings,
    validate_document_structure,
)
from core.id import new_component_id

from .detect import KEYED_GRAPH_ROOT, Detection, DocumentFormat, detect_format
from .legacy import ComponentMapping, canonical_type_name, coerce_responsive, get_mapping_for_type
from .models import DEFAULT_TITLE, CanonicalDocument, Node, RootNode, create_empty_document

logger = get_logger(__name__)


class MigrationError(Exception):
    """Strict migration refused a document."""

    def __init__(self, message: str, unmapped_types: list[str] | None = None) -> None:
        super().__init__(message)
        self.unmapped_types = unmapped_types or []


@dataclass
class MigrationReport:
    """Counts for observability; never affects the outcome."""

    format: DocumentFormat = DocumentFormat.UNKNOWN
    total: int = 0
    migrated: int = 0
    skipped: int = 0
    unmapped_types: list[str] = field(default_factory=list)

    def record_unmapped(self, type_name: str) -> None:
        if type_name not in self.unmapped_types:
            self.unmapped_types.append(type_name)

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format.value,
            "total": self.total,
            "migrated": self.migrated,
            "skipped": self.skipped,
            "unmapped_types": list(self.unmapped_types),
        }


@dataclass
class MigrationResult:
    document: CanonicalDocument
    report: MigrationReport
    diagnostics: Diagnostics
    detection: Detection | None = None


def _is_blank(raw: Any) -> bool:
    if raw is None:
        return True
    if isinstance(raw, (str, bytes)):
        return not raw.strip()
    if isinstance(raw, (dict, list, tuple)):
        return len(raw) == 0
    return False


class _KeyedGraphWalk:
    """One structural migration pass over a keyed-graph document."""

    def __init__(
        self,
        nodes: dict[str, Any],
        mappings: Iterable[ComponentMapping],
        strict: bool,
        preserve_ids: bool,
        report: MigrationReport,
        diagnostics: Diagnostics,
        max_depth: int,
    ) -> None:
        self.nodes = nodes
        self.mappings = list(mappings)
        self.strict = strict
        self.preserve_ids = preserve_ids
        self.report = report
        self.diagnostics = diagnostics
        self.max_depth = max_depth
        self.components: dict[str, Node] = {}
        self.zones: dict[str, list[str]] = {}
        self.visited: set[str] = set()

    def _new_id(self, legacy_id: str, zone: str | None) -> str:
        if self.preserve_ids and legacy_id not in self.components and legacy_id != "root":
            return legacy_id
        return new_component_id(zone)

    def migrate_list(
        self, legacy_ids: Any, parent_id: str | None, zone: str | None = None, depth: int = 0
    ) -> list[str]:
        if not isinstance(legacy_ids, list):
            return []
        result = []
        for legacy_id in legacy_ids:
            new_id = self.migrate_node(legacy_id, parent_id, zone, depth)
            if new_id is not None:
                result.append(new_id)
        return result

    def migrate_linked(self, linked: Any, owner_id: str, depth: int = 0) -> None:
        if not isinstance(linked, dict):
            return
        for slot, legacy_id in linked.items():
            zone_key = f"{owner_id}:{slot}"
            entries = legacy_id if isinstance(legacy_id, list) else [legacy_id]
            self.zones[zone_key] = self.migrate_list(entries, owner_id, zone_key, depth)

    def migrate_node(self, legacy_id: Any, parent_id: str | None, zone: str | None, depth: int) -> str | None:
        if not isinstance(legacy_id, str):
            return None
        if depth > self.max_depth:
            self.report.total += 1
            self.report.skipped += 1
            self.diagnostics.warning(
                Code.TREE_TOO_DEEP, f"Node {legacy_id} is nested deeper than {self.max_depth}", node_id=legacy_id
            )
            return None
        if legacy_id in self.visited:
            self.report.total += 1
            self.report.skipped += 1
            self.diagnostics.warning(
                Code.CYCLE_DETECTED, f"Node {legacy_id} referenced more than once", node_id=legacy_id
            )
            return None
        self.visited.add(legacy_id)

        legacy = self.nodes.get(legacy_id)
        if not isinstance(legacy, dict):
            self.report.total += 1
            self.report.skipped += 1
            self.diagnostics.warning(
                Code.DANGLING_REFERENCE, f"Node {legacy_id} does not exist", node_id=legacy_id, owner=parent_id
            )
            return None

        self.report.total += 1
        if legacy.get("hidden") is True:
            self.report.skipped += 1
            return None

        type_descriptor = legacy.get("type")
        type_name = type_descriptor.get("resolvedName") if isinstance(type_descriptor, dict) else type_descriptor
        if not isinstance(type_name, str):
            type_name = ""
        mapping = get_mapping_for_type(type_name, self.mappings)
        if mapping is None:
            if self.strict:
                raise MigrationError(f"Unmapped component type: {type_name or '<none>'}", [type_name])
            self.report.skipped += 1
            self.report.record_unmapped(type_name)
            self.diagnostics.warning(
                Code.UNMAPPED_TYPE, f"No mapping for component type {type_name!r}", node_id=legacy_id, type=type_name
            )
            return None

        props = legacy.get("props") if isinstance(legacy.get("props"), dict) else {}
        new_id = self._new_id(legacy_id, zone)
        # Reserve the id before recursing so children cannot reuse it
        self.components[new_id] = Node(id=new_id, type=mapping.canonical_type)

        children = None
        if isinstance(legacy.get("nodes"), list):
            children = self.migrate_list(legacy["nodes"], new_id, depth=depth + 1)
        self.migrate_linked(legacy.get("linkedNodes"), new_id, depth + 1)

        self.components[new_id] = Node(
            id=new_id,
            type=mapping.canonical_type,
            props=coerce_responsive(mapping.transform(props)),
            children=children,
            parent_id=parent_id,
            zone_id=zone,
        )
        self.report.migrated += 1
        return new_id


class DocumentMigrator:
    """
    Migrates raw documents (mappings, JSON text, models) to ``CanonicalDocument``.

    Args:
        settings: Engine settings (size/depth limits, JSON repair, defaults)
        custom_mappings: Keyed-graph mappings consulted before the defaults
        strict: Raise on unmapped keyed-graph types (defaults to settings)
        preserve_ids: Keep legacy ids where possible (defaults to settings)
    """

    def __init__(
        self,
        settings: Settings | None = None,
        custom_mappings: Iterable[ComponentMapping] | None = None,
        strict: bool | None = None,
        preserve_ids: bool | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.custom_mappings = list(custom_mappings or ())
        self.strict = self.settings.strict_migration if strict is None else strict
        self.preserve_ids = self.settings.preserve_ids if preserve_ids is None else preserve_ids

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def migrate(self, raw: Any) -> MigrationResult:
        """
        Migrate a raw document.

        Raises:
            MigrationError: Strict mode only, on an unmapped legacy type
        """
        diagnostics = Diagnostics()
        report = MigrationReport()

        if isinstance(raw, CanonicalDocument):
            report.format = DocumentFormat.CANONICAL
            return self._finish_canonical(raw, report, diagnostics, None)

        if _is_blank(raw):
            report.format = DocumentFormat.EMPTY
            diagnostics.info(Code.EMPTY_DOCUMENT, "Document is empty")
            return MigrationResult(create_empty_document(), report, diagnostics)

        decoded = self._decode(raw, diagnostics)
        if decoded is None:
            return MigrationResult(create_empty_document(), report, diagnostics)

        detection = detect_format(decoded)
        report.format = detection.format
        logger.debug("document_format_detected", format=detection.format.value, reason=detection.reason)

        if detection.format is DocumentFormat.CANONICAL:
            components = self._validate_components(decoded["components"], report, diagnostics)
            try:
                document = CanonicalDocument.model_validate({**decoded, "components": components})
            except PydanticValidationError as e:
                diagnostics.error(Code.INVALID_DOCUMENT, "Canonical document failed validation", errors=e.error_count())
                logger.warning("invalid_canonical_document", errors=e.error_count())
                return MigrationResult(create_empty_document(), report, diagnostics, detection)
            return self._finish_canonical(document, report, diagnostics, detection)

        if detection.format is DocumentFormat.FLAT_LIST:
            document = self._migrate_flat_list(decoded, report, diagnostics)
        elif detection.format is DocumentFormat.KEYED_GRAPH:
            document = self._migrate_keyed_graph(decoded, report, diagnostics)
        else:
            diagnostics.warning(Code.UNKNOWN_FORMAT, f"Unrecognised document format: {detection.reason}")
            logger.warning("unknown_document_format", reason=detection.reason)
            return MigrationResult(create_empty_document(), report, diagnostics, detection)

        logger.info("document_migrated", **report.to_dict())
        return MigrationResult(document, report, diagnostics, detection)

    def normalize_with_diagnostics(self, raw: Any) -> MigrationResult:
        """``migrate`` that degrades strict-mode failures to an empty document."""
        try:
            return self.migrate(raw)
        except MigrationError as e:
            diagnostics = Diagnostics()
            diagnostics.error(Code.STRICT_MIGRATION_FAILED, str(e), unmapped_types=e.unmapped_types)
            logger.warning("strict_migration_failed", error=str(e))
            report = MigrationReport(format=DocumentFormat.KEYED_GRAPH, unmapped_types=list(e.unmapped_types))
            return MigrationResult(create_empty_document(), report, diagnostics)

    def normalize(self, raw: Any) -> CanonicalDocument:
        return self.normalize_with_diagnostics(raw).document

    # ------------------------------------------------------------------
    # Decoding
    # ------------------------------------------------------------------

    def _check_limits(self, raw: Any, diagnostics: Diagnostics) -> bool:
        result = validate_document_structure(
            raw, self.settings.max_document_bytes, self.settings.max_document_depth
        )
        if isinstance(result, Failure):
            failure = result.failure()
            code = Code.DOCUMENT_TOO_LARGE if failure.field in ("size", "depth") else Code.INVALID_DOCUMENT
            diagnostics.error(code, failure.message, limit=failure.field)
            logger.warning("document_rejected", reason=failure.message)
            return False
        return True

    def _decode(self, raw: Any, diagnostics: Diagnostics) -> dict[str, Any] | None:
        if isinstance(raw, (str, bytes)):
            if not self._check_limits(raw, diagnostics):
                return None
            try:
                raw = extract_json(raw, repair=self.settings.json_repair)
            except JSONParseError as e:
                diagnostics.error(Code.PARSE_ERROR, f"Document is not valid JSON: {e}")
                logger.warning("document_parse_failed", error=str(e))
                return None

        if not isinstance(raw, dict):
            diagnostics.warning(Code.UNKNOWN_FORMAT, f"Unsupported document type: {type(raw).__name__}")
            return None

        if not self._check_limits(raw, diagnostics):
            return None
        return raw

    # ------------------------------------------------------------------
    # Formats
    # ------------------------------------------------------------------

    def _finish_canonical(
        self,
        document: CanonicalDocument,
        report: MigrationReport,
        diagnostics: Diagnostics,
        detection: Detection | None,
    ) -> MigrationResult:
        for owner, ref in document.dangling_references():
            diagnostics.warning(Code.DANGLING_REFERENCE, f"Reference to missing component {ref}", node_id=ref, owner=owner)
        report.migrated = len(document.components)
        report.total = report.migrated + report.skipped
        return MigrationResult(document, report, diagnostics, detection)

    def _validate_components(
        self, raw: dict[str, Any], report: MigrationReport, diagnostics: Diagnostics
    ) -> dict[str, Node]:
        """Validate arena entries one by one; invalid nodes are dropped, the rest kept."""
        components: dict[str, Node] = {}
        for node_id, entry in raw.items():
            try:
                components[node_id] = Node.model_validate({"id": node_id, **entry} if isinstance(entry, dict) else entry)
            except PydanticValidationError as e:
                report.skipped += 1
                diagnostics.error(
                    Code.INVALID_DOCUMENT, f"Component {node_id} failed validation", node_id=str(node_id),
                    errors=e.error_count(),
                )
                logger.warning("invalid_component", node_id=node_id, errors=e.error_count())
        return components

    def _flat_entry(self, item: Any, zone: str | None, used: set[str], report: MigrationReport) -> Node | None:
        report.total += 1
        if not isinstance(item, dict) or not isinstance(item.get("type"), str) or not item["type"]:
            report.skipped += 1
            return None

        props = dict(item.get("props") or {}) if isinstance(item.get("props"), dict) else {}
        legacy_id = props.pop("id", None)
        if self.preserve_ids and isinstance(legacy_id, str) and legacy_id and legacy_id not in used:
            node_id = legacy_id
        else:
            node_id = new_component_id(zone)
        used.add(node_id)

        report.migrated += 1
        return Node(
            id=node_id,
            type=canonical_type_name(item["type"]),
            props=coerce_responsive(props),
            zone_id=zone,
        )

    def _migrate_flat_list(
        self, raw: dict[str, Any], report: MigrationReport, diagnostics: Diagnostics
    ) -> CanonicalDocument:
        root_props = dict(raw["root"].get("props") or {}) if isinstance(raw["root"].get("props"), dict) else {}
        root_props["title"] = root_props.get("title") or DEFAULT_TITLE
        root_props["description"] = root_props.get("description") or ""

        components: dict[str, Node] = {}
        used: set[str] = set()
        root_children: list[str] = []

        for item in raw["content"]:
            node = self._flat_entry(item, None, used, report)
            if node is not None:
                components[node.id] = node
                root_children.append(node.id)

        zones: dict[str, list[str]] = {}
        raw_zones = raw.get("zones")
        for zone_name, entries in (raw_zones.items() if isinstance(raw_zones, dict) else ()):
            zones[zone_name] = []
            for item in entries if isinstance(entries, list) else ():
                node = self._flat_entry(item, zone_name, used, report)
                if node is not None:
                    components[node.id] = node
                    zones[zone_name].append(node.id)

        if report.skipped:
            diagnostics.warning(Code.INVALID_DOCUMENT, f"Skipped {report.skipped} malformed content entries")

        return CanonicalDocument(
            root=RootNode(props=root_props, children=root_children),
            components=components,
            zones=zones,
        )

    def _migrate_keyed_graph(
        self, raw: dict[str, Any], report: MigrationReport, diagnostics: Diagnostics
    ) -> CanonicalDocument:
        walk = _KeyedGraphWalk(
            raw, self.custom_mappings, self.strict, self.preserve_ids, report, diagnostics,
            self.settings.max_tree_depth,
        )
        root = raw[KEYED_GRAPH_ROOT]
        walk.visited.add(KEYED_GRAPH_ROOT)

        root_children = walk.migrate_list(root.get("nodes"), None)
        walk.migrate_linked(root.get("linkedNodes"), "root")

        root_props = root.get("props") if isinstance(root.get("props"), dict) else {}
        return CanonicalDocument(
            root=RootNode(
                props={
                    "title": root_props.get("title") or DEFAULT_TITLE,
                    "description": root_props.get("description") or "",
                },
                children=root_children,
            ),
            components=walk.components,
            zones=walk.zones,
        )


# ============================================================================
# Module-level API
# ============================================================================


def migrate(raw: Any, *, strict: bool = False, preserve_ids: bool = False, settings: Settings | None = None,
            custom_mappings: Iterable[ComponentMapping] | None = None) -> MigrationResult:
    """Migrate with a report; raises ``MigrationError`` only when ``strict``."""
    return DocumentMigrator(settings, custom_mappings, strict=strict, preserve_ids=preserve_ids).migrate(raw)


def normalize(raw: Any, *, strict: bool = False, preserve_ids: bool = False,
              settings: Settings | None = None) -> CanonicalDocument:
    """
    Normalize any raw document to the canonical schema. Never raises.

    Examples:
        >>> normalize(None).is_empty()
        True
    """
    return DocumentMigrator(settings, strict=strict, preserve_ids=preserve_ids).normalize(raw)

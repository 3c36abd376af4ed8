"""Page Handler."""

import time
from typing import Any

from pydantic import BaseModel, Field
from pydantic import ValidationError as PydanticValidationError

from core import (
    Diagnostics,
    LogContext,
    PageExportRequest,
    PageRenderRequest,
    Settings,
    ValidationError,
    get_logger,
    get_settings,
    trace_operation,
)
from document import DocumentMigrator, MigrationResult
from export import ExportOptions, StaticHTMLSerializer
from palette import PaletteResolver
from renderer import ModuleDescriptor, RenderTree, TreeRenderer, active_modules

logger = get_logger(__name__)


class PageRenderResponse(BaseModel):
    """Render output for the presentation layer."""

    page_id: str | None = None
    render_id: str | None = None
    tree: RenderTree
    phase: str
    report: dict[str, Any] = Field(default_factory=dict)
    stats: dict[str, Any] = Field(default_factory=dict)
    diagnostics: list[dict[str, Any]] = Field(default_factory=list)


class PageExportResponse(BaseModel):
    """Static export output."""

    page_id: str | None = None
    export_id: str
    html: str
    report: dict[str, Any] = Field(default_factory=dict)
    diagnostics: list[dict[str, Any]] = Field(default_factory=list)


def _validated(request: Any, model: type[PageRenderRequest]) -> PageRenderRequest:
    if isinstance(request, model):
        return request
    try:
        return model.model_validate(request)
    except PydanticValidationError as e:
        errors = e.errors()
        field = ".".join(str(part) for part in errors[0]["loc"]) if errors and errors[0]["loc"] else None
        raise ValidationError(f"Invalid request: {errors[0]['msg'] if errors else e}", field=field) from e


class PageHandler:
    """Handles page render and export requests: migrate, resolve palette, render or serialize."""

    def __init__(
        self,
        migrator: DocumentMigrator,
        palette_resolver: PaletteResolver,
        renderer: TreeRenderer,
        serializer: StaticHTMLSerializer,
        settings: Settings | None = None,
    ) -> None:
        self.migrator = migrator
        self.palette_resolver = palette_resolver
        self.renderer = renderer
        self.serializer = serializer
        self.settings = settings or get_settings()

    def _migrate(self, request: PageRenderRequest) -> MigrationResult:
        migrator = self.migrator
        if request.strict is not None and request.strict != migrator.strict:
            migrator = DocumentMigrator(
                self.settings, migrator.custom_mappings, strict=request.strict, preserve_ids=migrator.preserve_ids
            )
        return migrator.normalize_with_diagnostics(request.document)

    async def render(self, request: PageRenderRequest | dict[str, Any]) -> PageRenderResponse:
        """Migrate and render a page document."""
        start_time = time.time()

        try:
            validated = _validated(request, PageRenderRequest)
            logger.info("page_render", page_id=validated.page_id, modules=len(validated.modules))

            with LogContext(page_id=validated.page_id), trace_operation("page_render", page_id=validated.page_id):
                migration = self._migrate(validated)
                palette = self.palette_resolver.resolve_site(validated.site_settings)
                modules = [ModuleDescriptor(module_id=m.module_id, status=m.status) for m in validated.modules]
                result = await self.renderer.render(
                    migration.document, palette, modules, diagnostic_mode=validated.diagnostic_mode
                )

                diagnostics = Diagnostics(migration.diagnostics)
                diagnostics.extend(result.diagnostics)
                logger.info(
                    "page_rendered",
                    duration_ms=(time.time() - start_time) * 1000,
                    diagnostics=len(diagnostics),
                )

                return PageRenderResponse(
                    page_id=validated.page_id,
                    render_id=result.render_id,
                    tree=result.tree,
                    phase=result.phase.value,
                    report=migration.report.to_dict(),
                    stats=result.stats.to_dict(),
                    diagnostics=diagnostics.to_list(),
                )

        except ValidationError as e:
            logger.error("validation", error=str(e), field=e.field)
            raise

    async def export(self, request: PageExportRequest | dict[str, Any]) -> PageExportResponse:
        """Migrate and serialize a page document to static HTML."""
        try:
            validated = _validated(request, PageExportRequest)
            logger.info("page_export", page_id=validated.page_id)

            with LogContext(page_id=validated.page_id), trace_operation("page_export", page_id=validated.page_id):
                diagnostics = Diagnostics()
                modules = [ModuleDescriptor(module_id=m.module_id, status=m.status) for m in validated.modules]
                if active_modules(modules):
                    self.renderer.registry.ensure_ready()
                    await self.renderer.load_modules(modules, diagnostics)

                migration = self._migrate(validated)
                options = ExportOptions(
                    palette=self.palette_resolver.resolve_site(validated.site_settings),
                    tag_overrides=dict(validated.tag_overrides),
                    minify=validated.minify,
                    full_document=validated.full_document,
                    inline_styles=validated.inline_styles,
                    diagnostic_mode=validated.diagnostic_mode,
                )
                result = self.serializer.export(migration.document, options)

                diagnostics.extend(migration.diagnostics)
                diagnostics.extend(result.diagnostics)

                return PageExportResponse(
                    page_id=validated.page_id,
                    export_id=result.export_id,
                    html=result.html,
                    report=migration.report.to_dict(),
                    diagnostics=diagnostics.to_list(),
                )

        except ValidationError as e:
            logger.error("validation", error=str(e), field=e.field)
            raise

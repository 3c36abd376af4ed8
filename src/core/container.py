"""Dependency Injection Container."""

from injector import Injector, Module, provider, singleton

from document import DocumentMigrator
from export import StaticHTMLSerializer
from handlers.page import PageHandler
from palette import PaletteResolver
from registry import ComponentRegistry
from renderer import ModuleLoader, RegistryModuleLoader, TreeRenderer
from .config import Settings, get_settings
from .logging_config import configure_from_settings


class CoreModule(Module):
    """Engine dependencies; one shared registry per container."""

    def __init__(self, settings: Settings | None = None) -> None:
        self.settings = settings or get_settings()

    @singleton
    @provider
    def provide_settings(self) -> Settings:
        return self.settings

    @singleton
    @provider
    def provide_registry(self) -> ComponentRegistry:
        """Provide bootstrapped component registry."""
        return ComponentRegistry().ensure_ready()

    @singleton
    @provider
    def provide_module_loader(self) -> ModuleLoader:
        return RegistryModuleLoader()

    @singleton
    @provider
    def provide_migrator(self, settings: Settings) -> DocumentMigrator:
        return DocumentMigrator(settings)

    @singleton
    @provider
    def provide_palette_resolver(self, settings: Settings) -> PaletteResolver:
        return PaletteResolver(max_size=settings.palette_cache_size)

    @singleton
    @provider
    def provide_renderer(
        self, registry: ComponentRegistry, module_loader: ModuleLoader, settings: Settings
    ) -> TreeRenderer:
        return TreeRenderer(registry, module_loader, settings)

    @singleton
    @provider
    def provide_serializer(self, registry: ComponentRegistry, settings: Settings) -> StaticHTMLSerializer:
        return StaticHTMLSerializer(registry, settings)

    @singleton
    @provider
    def provide_page_handler(
        self,
        migrator: DocumentMigrator,
        palette_resolver: PaletteResolver,
        renderer: TreeRenderer,
        serializer: StaticHTMLSerializer,
        settings: Settings,
    ) -> PageHandler:
        """Provide page handler with all dependencies."""
        return PageHandler(migrator, palette_resolver, renderer, serializer, settings)


def create_container(settings: Settings | None = None) -> Injector:
    """Create configured injector; also configures logging from settings."""
    module = CoreModule(settings)
    configure_from_settings(module.settings)
    return Injector([module])

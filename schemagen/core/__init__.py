"""
Core code generation components.

Provides the schema model and parser, naming, type mapping, the
artifact representation and the rendering backend used by all
generators.
"""

from .config import CodegenConfig, ConfigManager, load_config
from .exceptions import (
    CodegenError,
    ConfigError,
    GenerationError,
    SchemaNotAFileError,
    SchemaNotFoundError,
    SchemaParseError,
    SchemaSourceError,
    SchemaUnreadableError,
    UnknownScalarError,
)
from .generator import (
    Artifact,
    ArtifactField,
    ArtifactGenerator,
    ArtifactKind,
    ArtifactRenderer,
    GenerationContext,
    GenerationResult,
    GenerationStatus,
    format_code,
)
from .naming import NameSanitizer, NamingCase, NamingConvention, NamingSuffixes, Partition
from .parser import SchemaParser, SchemaValidator, read_schema_bytes
from .schema import ListOf, Named, NonNull, SchemaModel, TypeReference
from .templates import TemplateEngine, TemplateError, create_template_engine
from .types import DEFAULT_SCALAR_MAPPINGS, ScalarRegistry, TargetType, TypeMapper

__all__ = [
    # Configuration system
    "CodegenConfig",
    "ConfigManager",
    "load_config",
    # Errors
    "CodegenError",
    "ConfigError",
    "GenerationError",
    "SchemaNotAFileError",
    "SchemaNotFoundError",
    "SchemaParseError",
    "SchemaSourceError",
    "SchemaUnreadableError",
    "UnknownScalarError",
    # Artifacts and rendering
    "Artifact",
    "ArtifactField",
    "ArtifactGenerator",
    "ArtifactKind",
    "ArtifactRenderer",
    "GenerationContext",
    "GenerationResult",
    "GenerationStatus",
    "format_code",
    # Naming
    "NameSanitizer",
    "NamingCase",
    "NamingConvention",
    "NamingSuffixes",
    "Partition",
    # Schema model and parsing
    "ListOf",
    "Named",
    "NonNull",
    "SchemaModel",
    "SchemaParser",
    "SchemaValidator",
    "TypeReference",
    "read_schema_bytes",
    # Template system
    "TemplateEngine",
    "TemplateError",
    "create_template_engine",
    # Type mapping
    "DEFAULT_SCALAR_MAPPINGS",
    "ScalarRegistry",
    "TargetType",
    "TypeMapper",
]

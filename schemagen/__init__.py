"""
schemagen: typed Python code generation from GraphQL introspection schemas.

Parses an introspection result, maps its types to Python, and writes
one module per schema construct. Repeated runs over an unchanged
schema and configuration are skipped.
"""

__version__ = "0.1.0"

from .controller import CodegenController, compute_hash, generate
from .core.config import CodegenConfig, ConfigManager, load_config
from .core.exceptions import (
    CodegenError,
    ConfigError,
    GenerationError,
    SchemaNotAFileError,
    SchemaNotFoundError,
    SchemaParseError,
    SchemaUnreadableError,
    UnknownScalarError,
)
from .core.generator import GenerationResult, GenerationStatus
from .core.naming import NamingConvention, NamingSuffixes
from .core.parser import SchemaParser
from .registry import GeneratorRegistry, get_registry

__all__ = [
    "__version__",
    # Pipeline
    "CodegenController",
    "compute_hash",
    "generate",
    "GenerationResult",
    "GenerationStatus",
    "GeneratorRegistry",
    "get_registry",
    "SchemaParser",
    # Configuration
    "CodegenConfig",
    "ConfigManager",
    "load_config",
    "NamingConvention",
    "NamingSuffixes",
    # Errors
    "CodegenError",
    "ConfigError",
    "GenerationError",
    "SchemaNotAFileError",
    "SchemaNotFoundError",
    "SchemaParseError",
    "SchemaUnreadableError",
    "UnknownScalarError",
]

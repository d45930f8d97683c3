"""
Exception hierarchy for schema code generation.

Every failure surfaced to callers is a CodegenError subclass so the
build integration can tell input, model, mapping and generation
problems apart.
"""

from typing import Optional


class CodegenError(Exception):
    """Base exception for all code generation errors."""

    pass


class ConfigError(CodegenError):
    """Exception raised for configuration-related errors."""

    pass


class SchemaParseError(CodegenError):
    """Raised when schema content cannot be parsed or validated."""

    def __init__(self, message: str, location: Optional[str] = None):
        self.location = location
        if location:
            message = f"{message} at {location}"
        super().__init__(message)


class SchemaSourceError(SchemaParseError):
    """Raised when the schema source itself cannot be read."""

    def __init__(self, message: str, path):
        self.path = path
        super().__init__(f"{message}: {path}")


class SchemaNotFoundError(SchemaSourceError):
    def __init__(self, path):
        super().__init__("Schema file does not exist", path)


class SchemaNotAFileError(SchemaSourceError):
    def __init__(self, path):
        super().__init__("Schema path is not a file", path)


class SchemaUnreadableError(SchemaSourceError):
    def __init__(self, path):
        super().__init__("Schema file is not readable", path)


class GenerationError(CodegenError):
    """Base exception for failures while producing or writing artifacts."""

    pass


class UnknownScalarError(GenerationError):
    """Raised when a scalar has neither an override nor a default mapping."""

    def __init__(self, scalar_name: str):
        self.scalar_name = scalar_name
        super().__init__(
            f"No type mapping for scalar '{scalar_name}'. "
            f"Add it to the scalar mappings configuration."
        )

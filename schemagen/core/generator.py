"""
Base generator interface for all artifact kinds.

Generators turn schema definitions into ``Artifact`` values, a
structured description of one generated module. Rendering those values
to Python source is the separate job of ``ArtifactRenderer``.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from pathlib import PurePosixPath
from types import MappingProxyType
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set, Tuple

from .exceptions import GenerationError
from .naming import NamingConvention, module_name, package_for
from .schema import SchemaModel
from .templates import TemplateEngine, create_template_engine
from .types import TargetType, TypeMapper

GENERATED_HEADER = "# Generated by schemagen. Do not edit."


class ArtifactKind:
    """Kinds of generated artifacts; each renders through its own template."""

    DTO = "dto"
    INPUT = "input"
    INTERFACE = "interface"
    UNION = "union"
    ENUM = "enum"
    PROJECTION = "projection"
    QUERY = "query"
    MUTATION = "mutation"


_TEMPLATES = {
    ArtifactKind.DTO: "dto.py.j2",
    ArtifactKind.INPUT: "input.py.j2",
    ArtifactKind.INTERFACE: "interface.py.j2",
    ArtifactKind.UNION: "union.py.j2",
    ArtifactKind.ENUM: "enum.py.j2",
    ArtifactKind.PROJECTION: "projection.py.j2",
    ArtifactKind.QUERY: "operation.py.j2",
    ArtifactKind.MUTATION: "operation.py.j2",
}


@dataclass(frozen=True)
class ArtifactField:
    """One member of a generated class (attribute, accessor, argument or selector)."""

    name: str
    graphql_name: str
    annotation: str = ""
    target: Optional[TargetType] = None
    required: bool = False
    description: Optional[str] = None
    deprecated: bool = False
    deprecation_reason: Optional[str] = None
    # GraphQL literal, for arguments and input fields
    default_value: Optional[str] = None
    # GraphQL type reference text, for arguments
    graphql_type: Optional[str] = None
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))


@dataclass(frozen=True)
class Artifact:
    """
    Language-level description of one generated module.

    ``permits`` holds fully-qualified class names; ``imports`` are needed
    at runtime while ``type_imports`` are only for annotations.
    """

    kind: str
    namespace: str
    partition: str
    name: str
    graphql_name: str
    description: Optional[str] = None
    fields: Tuple[ArtifactField, ...] = ()
    bases: Tuple[str, ...] = ()
    permits: Tuple[str, ...] = ()
    imports: Tuple[Tuple[str, Optional[str]], ...] = ()
    type_imports: Tuple[Tuple[str, Optional[str]], ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)
    # Fully qualified module; derived from the class name when empty
    module: str = ""

    def __post_init__(self):
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if not self.module:
            object.__setattr__(self, "module", f"{self.package}.{module_name(self.name)}")

    @property
    def package(self) -> str:
        return package_for(self.namespace, self.partition)

    @property
    def qualified_name(self) -> str:
        return f"{self.module}.{self.name}"

    @property
    def relative_path(self) -> PurePosixPath:
        """Path of the module file relative to the output directory."""
        return PurePosixPath(*self.module.split(".")).with_suffix(".py")

    @property
    def template(self) -> str:
        try:
            return _TEMPLATES[self.kind]
        except KeyError:
            raise GenerationError(f"No template for artifact kind '{self.kind}'")

    def get_field(self, name: str) -> Optional[ArtifactField]:
        for f in self.fields:
            if f.name == name:
                return f
        return None


class ImportCollector:
    """Accumulates the imports of one generated module."""

    def __init__(self, own_module: str):
        self.own_module = own_module
        self._imports: Set[Tuple[str, Optional[str]]] = set()

    def add(self, module: str, name: Optional[str] = None):
        if module == self.own_module:
            return
        self._imports.add((module, name))

    def add_type(self, target: TargetType):
        for module, name in target.imports():
            self.add(module, name)

    def items(self) -> Tuple[Tuple[str, Optional[str]], ...]:
        # None sorts before names so plain imports come first
        return tuple(sorted(self._imports, key=lambda item: (item[0], item[1] or "")))


@dataclass(frozen=True)
class GenerationContext:
    """Everything a generator reads; shared read-only across one run."""

    mapper: TypeMapper
    namespace: str
    naming: NamingConvention
    add_comments: bool = True

    @property
    def model(self) -> SchemaModel:
        return self.mapper.model


class ArtifactGenerator(ABC):
    """Abstract base class for all construct-kind generators."""

    kind: str = ""

    def __init__(self, context: GenerationContext):
        self.context = context

    @property
    def mapper(self) -> TypeMapper:
        return self.context.mapper

    @property
    def naming(self) -> NamingConvention:
        return self.context.naming

    @property
    def namespace(self) -> str:
        return self.context.namespace

    def module_for(self, partition: str, class_name: str) -> str:
        return self.mapper.layout.module(partition, class_name)

    @abstractmethod
    def select(self, model: SchemaModel) -> Iterable[Any]:
        """Definitions of this generator's kind, in declaration order."""
        pass

    @abstractmethod
    def generate_one(self, definition: Any) -> Artifact:
        """
        Generate the artifact for a single definition.

        Args:
            definition: Schema definition of this generator's kind

        Returns:
            Artifact describing the generated module
        """
        pass

    def generate(self, model: SchemaModel) -> List[Artifact]:
        """
        Generate artifacts for every matching definition.

        Any failure aborts the whole batch; no artifact is silently dropped.
        """
        return [self.generate_one(definition) for definition in self.select(model)]

    def describe(self, text: Optional[str]) -> Optional[str]:
        """Description carried into docs, or None when comments are disabled."""
        if not self.context.add_comments or not text or not text.strip():
            return None
        return text.strip()


def format_code(code: str) -> str:
    """
    Normalise generated source text.

    Strips trailing whitespace, allows at most two consecutive blank
    lines, and ends the text with exactly one newline.
    """
    lines = code.split("\n")
    formatted_lines = []
    blank_count = 0

    for line in lines:
        stripped = line.rstrip()
        if not stripped:
            blank_count += 1
            if blank_count <= 2:
                formatted_lines.append("")
        else:
            blank_count = 0
            formatted_lines.append(stripped)

    text = "\n".join(formatted_lines).strip("\n")
    return text + "\n" if text else ""


class ArtifactRenderer:
    """Renders artifacts to Python source through Jinja2 templates."""

    def __init__(
        self,
        template_engine: Optional[TemplateEngine] = None,
        add_comments: bool = True,
    ):
        self.template_engine = template_engine or create_template_engine()
        self.add_comments = add_comments

    def render(self, artifact: Artifact) -> str:
        context = {
            "artifact": artifact,
            "header": GENERATED_HEADER if self.add_comments else None,
            "imports": self._import_lines(artifact.imports),
            "type_imports": self._import_lines(artifact.type_imports),
        }
        code = self.template_engine.render_template(artifact.template, context)
        return format_code(code)

    @staticmethod
    def _import_lines(imports: Iterable[Tuple[str, Optional[str]]]) -> List[str]:
        plain: List[str] = []
        grouped: Dict[str, List[str]] = {}
        bound: Dict[str, str] = {}

        for module, name in imports:
            if name is None:
                plain.append(f"import {module}")
                continue
            owner = bound.get(name)
            if owner is not None and owner != module:
                raise GenerationError(
                    f"Conflicting imports for '{name}' from {owner} and {module}"
                )
            bound[name] = module
            grouped.setdefault(module, []).append(name)

        lines = sorted(set(plain))
        for module in sorted(grouped):
            lines.append(f"from {module} import {', '.join(sorted(set(grouped[module])))}")
        return lines


class GenerationStatus(Enum):
    GENERATED = "generated"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of one controller invocation."""

    status: GenerationStatus
    artifact_count: int = 0

    @classmethod
    def generated(cls, artifact_count: int) -> "GenerationResult":
        return cls(GenerationStatus.GENERATED, artifact_count)

    @classmethod
    def skipped(cls) -> "GenerationResult":
        return cls(GenerationStatus.SKIPPED, 0)

    @property
    def is_generated(self) -> bool:
        return self.status is GenerationStatus.GENERATED

    @property
    def is_skipped(self) -> bool:
        return self.status is GenerationStatus.SKIPPED

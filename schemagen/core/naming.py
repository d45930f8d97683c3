"""
Naming utilities for safe code generation.

Two concerns live here: the artifact naming convention (suffix rules
that turn schema names into class names) and identifier sanitizing for
the Python members and modules that hold them.
"""

import keyword
import re
from dataclasses import dataclass, fields
from enum import Enum
from typing import Dict, Iterable, Optional, Set, Tuple

GRAPHQL_NAME_NONE_MSG = "graphql_name must not be None"

PROJECTION_SUFFIX = "Projection"


@dataclass(frozen=True)
class NamingSuffixes:
    """Immutable bundle of the four configurable artifact suffixes."""

    type_suffix: str = "DTO"
    input_suffix: str = "Input"
    query_suffix: str = "Query"
    mutation_suffix: str = "Mutation"

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                raise ValueError(f"{f.name} must not be None")
            if not isinstance(value, str):
                raise ValueError(f"{f.name} must be a string, got {type(value).__name__}")

    @classmethod
    def custom(
        cls,
        type_suffix: str,
        input_suffix: str,
        query_suffix: str,
        mutation_suffix: str,
    ) -> "NamingSuffixes":
        """Build a bundle where every suffix must be given explicitly."""
        return cls(type_suffix, input_suffix, query_suffix, mutation_suffix)

    @classmethod
    def from_dict(cls, data: Dict[str, str]) -> "NamingSuffixes":
        """
        Build a bundle from a configuration mapping.

        All four keys are required.
        """
        expected = [f.name for f in fields(cls)]
        missing = [name for name in expected if data.get(name) is None]
        if missing:
            raise ValueError(f"Naming suffixes missing: {', '.join(missing)}")
        unknown = sorted(set(data) - set(expected))
        if unknown:
            raise ValueError(f"Unknown naming suffixes: {', '.join(unknown)}")
        return cls(**{name: data[name] for name in expected})

    def to_dict(self) -> Dict[str, str]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def capitalize(name: str) -> str:
    """Upper-case the first character only."""
    if not name:
        return name
    return name[0].upper() + name[1:]


class NamingConvention:
    """Maps raw schema names to generated artifact class names."""

    def __init__(self, suffixes: Optional[NamingSuffixes] = None):
        self.suffixes = suffixes or NamingSuffixes()

    def type_name(self, graphql_name: str) -> str:
        return self._with_suffix(graphql_name, self.suffixes.type_suffix)

    def input_type_name(self, graphql_name: str) -> str:
        return self._with_suffix(graphql_name, self.suffixes.input_suffix)

    def query_name(self, graphql_name: str) -> str:
        return self._with_suffix(graphql_name, self.suffixes.query_suffix)

    def mutation_name(self, graphql_name: str) -> str:
        return self._with_suffix(graphql_name, self.suffixes.mutation_suffix)

    def enum_name(self, graphql_name: str) -> str:
        return capitalize(self._require(graphql_name))

    def interface_name(self, graphql_name: str) -> str:
        return capitalize(self._require(graphql_name))

    def union_name(self, graphql_name: str) -> str:
        return capitalize(self._require(graphql_name))

    def projection_name(self, graphql_name: str) -> str:
        return capitalize(self._require(graphql_name)) + PROJECTION_SUFFIX

    @staticmethod
    def _require(graphql_name: str) -> str:
        if graphql_name is None:
            raise ValueError(GRAPHQL_NAME_NONE_MSG)
        return graphql_name

    def _with_suffix(self, graphql_name: str, suffix: str) -> str:
        # Idempotent: never double-append
        name = capitalize(self._require(graphql_name))
        if suffix and name.endswith(suffix):
            return name
        return name + suffix


class NamingCase(Enum):
    """Different naming case styles."""
    SNAKE_CASE = "snake"      # user_name
    PRESERVE = "preserve"     # as declared


PYTHON_RESERVED_WORDS = frozenset(keyword.kwlist) | frozenset(keyword.softkwlist)

# Names that would shadow members every generated class relies on
GENERATED_MEMBER_NAMES = frozenset({
    'builder', 'build', 'to_variables', 'to_graphql', 'variables',
    'operation_name', 'response_type', 'selecting', 'selection', 'from_value',
    'to_value', 'to_request', 'self', 'cls',
})


class NameSanitizer:
    """Handles name sanitization and case conversion."""

    def __init__(self, reserved_words: Optional[Set[str]] = None):
        """
        Initialize name sanitizer.

        Args:
            reserved_words: Names that get a trailing underscore
        """
        self.reserved_words = reserved_words if reserved_words is not None else PYTHON_RESERVED_WORDS
        self._name_cache: Dict[str, str] = {}
        self._used_names: Set[str] = set()

    def sanitize_name(self, name: str, target_case: NamingCase = NamingCase.SNAKE_CASE) -> str:
        """
        Sanitize a name for safe use as a Python identifier.

        The same input always yields the same output for one sanitizer;
        distinct inputs never share an output.

        Args:
            name: Original name to sanitize
            target_case: Desired case style

        Returns:
            Sanitized name safe for use
        """
        cache_key = f"{name}_{target_case.value}"
        if cache_key in self._name_cache:
            return self._name_cache[cache_key]

        cleaned = self._clean_basic(name)
        converted = self._convert_case(cleaned, target_case)
        final_name = self._resolve_conflicts(converted)

        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)
        return final_name

    def claim(self, name: str, final_name: str, target_case: NamingCase = NamingCase.SNAKE_CASE):
        """
        Pin ``name`` to an already chosen identifier.

        Raises ValueError if ``name`` is pinned elsewhere or ``final_name``
        already belongs to another name.
        """
        cache_key = f"{name}_{target_case.value}"
        current = self._name_cache.get(cache_key)
        if current == final_name:
            return
        if current is not None:
            raise ValueError(f"'{name}' is already named '{current}', cannot rename to '{final_name}'")
        if final_name in self._used_names:
            raise ValueError(f"'{final_name}' is already used by another member, cannot give it to '{name}'")
        self._name_cache[cache_key] = final_name
        self._used_names.add(final_name)

    def _clean_basic(self, name: str) -> str:
        """Basic name cleanup - remove invalid characters."""
        cleaned = re.sub(r'[^a-zA-Z0-9_]', '_', name)

        if cleaned and cleaned[0].isdigit():
            cleaned = f"_{cleaned}"

        if not cleaned.strip('_'):
            cleaned = "field"

        return cleaned

    def _convert_case(self, name: str, target_case: NamingCase) -> str:
        if target_case == NamingCase.SNAKE_CASE:
            return to_snake_case(name)
        return name

    def _resolve_conflicts(self, name: str) -> str:
        """Resolve naming conflicts with reserved words and existing names."""
        if name in self.reserved_words:
            name = f"{name}_"

        original_name = name
        counter = 1
        while name in self._used_names:
            name = f"{original_name}_{counter}"
            counter += 1

        return name


def to_snake_case(name: str) -> str:
    """Convert camelCase or PascalCase to snake_case, keeping a leading underscore."""
    leading = '_' if name.startswith('_') else ''
    name = re.sub(r'([A-Z]+)([A-Z][a-z])', r'\1_\2', name)
    name = re.sub(r'([a-z0-9])([A-Z])', r'\1_\2', name)
    name = re.sub(r'_+', '_', name.lower()).strip('_')
    return leading + name


def create_member_sanitizer() -> NameSanitizer:
    """Sanitizer for attribute and argument names inside one generated class."""
    return NameSanitizer(PYTHON_RESERVED_WORDS | GENERATED_MEMBER_NAMES)


def module_name(class_name: str) -> str:
    """Module file stem holding a generated class."""
    return to_snake_case(class_name) or "module"


class Partition:
    """Fixed sub-package per artifact category."""

    TYPE = "type"
    INPUT = "input"
    ENUMERATION = "enumeration"
    UNION = "union"
    QUERY = "query"
    MUTATION = "mutation"

    ALL = (TYPE, INPUT, ENUMERATION, UNION, QUERY, MUTATION)


def package_for(namespace: str, partition: str) -> str:
    """Fully qualified package of a partition under the base namespace."""
    return f"{namespace}.{partition}"


class ModuleLayout:
    """
    Module stem of every generated class, per partition.

    The stem is the snake_case class name. When several classes of one
    partition share a stem, the first in declaration order keeps it and
    the others get ``_2``, ``_3`` and so on, skipping any stem another
    class uses as is.
    """

    def __init__(self, namespace: str):
        self.namespace = namespace
        self._stems: Dict[Tuple[str, str], str] = {}

    def plan(self, partition: str, class_names: Iterable[str]):
        names = [name for name in dict.fromkeys(class_names) if (partition, name) not in self._stems]
        used = {stem for (p, _), stem in self._stems.items() if p == partition}
        plain = {module_name(name) for name in names}

        for class_name in names:
            base = stem = module_name(class_name)
            counter = 2
            while stem in used or (stem != base and stem in plain):
                stem = f"{base}_{counter}"
                counter += 1
            used.add(stem)
            self._stems[(partition, class_name)] = stem

    def stem(self, partition: str, class_name: str) -> str:
        return self._stems.get((partition, class_name)) or module_name(class_name)

    def module(self, partition: str, class_name: str) -> str:
        """Fully qualified module that holds a generated class."""
        return f"{package_for(self.namespace, partition)}.{self.stem(partition, class_name)}"

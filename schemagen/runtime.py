"""
Runtime support for generated code.

Generated modules import from here; nothing in this module sends
requests. Executing an operation is left to whichever GraphQL client
the application uses, fed with ``to_graphql()`` and ``variables()``.
"""

import datetime
import decimal
import enum
import inspect
import uuid
from abc import ABC, abstractmethod
from typing import Any, ClassVar, Dict, Optional, Tuple


class RequiredFieldMissingError(ValueError):
    """Raised by a builder when a required field was never set."""

    def __init__(self, field_name: str, owner: Optional[str] = None):
        self.field_name = field_name
        self.owner = owner
        where = f" on {owner}" if owner else ""
        super().__init__(f"Required field '{field_name}' is not set{where}")


class ClosedHierarchy:
    """
    Base for generated interfaces and unions.

    Direct subclasses are hierarchy roots and declare ``__permitted__``
    (fully-qualified implementer class names) and ``__fields__`` (accessor
    names each implementer must declare). Any other subclass must be listed
    by every root it derives from.
    """

    __permitted__: ClassVar[Tuple[str, ...]] = ()
    __fields__: ClassVar[Tuple[str, ...]] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if ClosedHierarchy in cls.__bases__:
            return

        qualified = f"{cls.__module__}.{cls.__qualname__}"
        declared = set()
        for klass in cls.__mro__:
            if klass is ClosedHierarchy or ClosedHierarchy in klass.__bases__:
                continue
            declared.update(inspect.get_annotations(klass))

        for root in hierarchy_roots(cls):
            if qualified not in root.__permitted__:
                raise TypeError(
                    f"{qualified} is not a permitted subclass of {root.__qualname__}"
                )
            missing = [name for name in root.__fields__ if name not in declared]
            if missing:
                raise TypeError(
                    f"{qualified} does not declare {', '.join(missing)} "
                    f"required by {root.__qualname__}"
                )


def hierarchy_roots(cls: type) -> Tuple[type, ...]:
    """Generated interfaces and unions a class belongs to."""
    return tuple(
        klass
        for klass in cls.__mro__[1:]
        if klass is not ClosedHierarchy and ClosedHierarchy in klass.__bases__
    )


def to_graphql_value(value: Any) -> Any:
    """Convert a Python value to its JSON-compatible variable form."""
    # Enums first: str-valued members are also str instances
    if isinstance(value, enum.Enum):
        return value.value
    if value is None or isinstance(value, (bool, int, float, str)):
        return value
    if hasattr(value, "to_variables"):
        return value.to_variables()
    if isinstance(value, (list, tuple)):
        return [to_graphql_value(item) for item in value]
    if isinstance(value, dict):
        return {key: to_graphql_value(item) for key, item in value.items()}
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, (decimal.Decimal, uuid.UUID)):
        return str(value)
    return value


class GraphQLOperation(ABC):
    """Base class of generated query and mutation wrappers."""

    OPERATION_TYPE: ClassVar[str] = ""
    FIELD_NAME: ClassVar[str] = ""

    @classmethod
    @abstractmethod
    def operation_name(cls) -> str:
        """Name used in the operation document."""

    @abstractmethod
    def to_graphql(self) -> str:
        """Operation document text."""

    @abstractmethod
    def variables(self) -> Dict[str, Any]:
        """Variables for the document, keyed by argument name."""

    @classmethod
    @abstractmethod
    def response_type(cls) -> str:
        """Annotation of the value found under ``FIELD_NAME`` in the response data."""

    def to_request(self) -> Dict[str, Any]:
        """Standard GraphQL-over-HTTP request body."""
        return {
            "query": self.to_graphql(),
            "operationName": self.operation_name(),
            "variables": self.variables(),
        }

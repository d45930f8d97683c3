"""Construct-kind generators, one per schema definition kind."""

from .enums import EnumGenerator
from .inputs import InputTypeGenerator
from .interfaces import InterfaceGenerator
from .objects import TypeGenerator
from .operations import MutationGenerator, OperationGenerator, QueryGenerator
from .projections import ProjectionGenerator
from .unions import UnionGenerator

__all__ = [
    "EnumGenerator",
    "InputTypeGenerator",
    "InterfaceGenerator",
    "MutationGenerator",
    "OperationGenerator",
    "ProjectionGenerator",
    "QueryGenerator",
    "TypeGenerator",
    "UnionGenerator",
]

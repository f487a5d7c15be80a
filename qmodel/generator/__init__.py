"""qmodel query class generator."""

from .ancestors import ClassResolutionError as ClassResolutionError
from .ancestors import resolve_ancestor as resolve_ancestor
from .batch import BatchResult as BatchResult
from .batch import ClassResult as ClassResult
from .batch import Outcome as Outcome
from .batch import generate_all as generate_all
from .batch import generate_class as generate_class
from .categories import CategoryKind as CategoryKind
from .categories import NumericKind as NumericKind
from .categories import TypeCategory as TypeCategory
from .categories import classify as classify
from .classgen import GeneratedClass as GeneratedClass
from .classgen import GeneratedMember as GeneratedMember
from .classgen import generate as generate
from .members import persistent_members as persistent_members
from .parser import *
from .schema import SchemaIndex as SchemaIndex
from .schema import query_class_name as query_class_name
from .sink import DirectorySink as DirectorySink
from .sink import MemorySink as MemorySink
from .sink import SinkWriteError as SinkWriteError
from .types import *

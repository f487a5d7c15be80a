"""Generation of the query classes of a whole schema."""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from enum import StrEnum, auto

from . import python
from .ancestors import ClassResolutionError
from .classgen import generate
from .schema import SchemaIndex
from .sink import SinkWriteError, SourceSink
from .types import ClassDescriptor, GenerationConfig

logger = logging.getLogger(__name__)


class Outcome(StrEnum):
    """Result of generating one class."""

    GENERATED = auto()
    SKIPPED = auto()  # not generated, with a diagnostic
    FAILED = auto()  # rendered but not stored


@dataclass(frozen=True)
class ClassResult:
    source: str
    outcome: Outcome
    generated: str | None = None
    diagnostic: str | None = None


@dataclass(frozen=True)
class BatchResult:
    results: tuple[ClassResult, ...]

    def _with(self, outcome: Outcome) -> list[ClassResult]:
        return [r for r in self.results if r.outcome == outcome]

    @property
    def generated(self) -> list[ClassResult]:
        return self._with(Outcome.GENERATED)

    @property
    def skipped(self) -> list[ClassResult]:
        return self._with(Outcome.SKIPPED)

    @property
    def failed(self) -> list[ClassResult]:
        return self._with(Outcome.FAILED)

    @property
    def ok(self) -> bool:
        return not self.failed


def generate_class(
    cls: ClassDescriptor, schema: SchemaIndex, config: GenerationConfig, sink: SourceSink
) -> ClassResult:
    """Generate, render and store the query class of one persistent class."""
    source = cls.qualified_name
    if cls.outer is not None:
        diagnostic = (
            f"Persistable nested class {source} is not processed, declare it at top level"
        )
        logger.warning(diagnostic)
        return ClassResult(source, Outcome.SKIPPED, diagnostic=diagnostic)

    try:
        generated = generate(cls, schema, config)
    except ClassResolutionError as e:
        logger.warning("Skipping %s: %s", source, e)
        return ClassResult(source, Outcome.SKIPPED, diagnostic=str(e))

    text = python.render(generated)
    try:
        sink.write(generated.qualified_name, text)
    except SinkWriteError as e:
        logger.error("Failed to write %s: %s", generated.qualified_name, e)
        return ClassResult(source, Outcome.FAILED, generated.qualified_name, str(e))

    logger.info("%s -> %s", source, generated.qualified_name)
    return ClassResult(source, Outcome.GENERATED, generated.qualified_name)


def generate_all(
    schema: SchemaIndex,
    config: GenerationConfig,
    sink: SourceSink,
    workers: int = 1,
    cancel: threading.Event | None = None,
) -> BatchResult:
    """Generate the query classes of every persistent class of ``schema``.

    Classes are independent: a class that cannot be generated is reported
    and the others proceed. With ``workers > 1`` classes are generated on a
    thread pool; results keep the schema's class order either way. Setting
    ``cancel`` stops classes not yet started, which are reported as skipped.
    """

    def run(cls: ClassDescriptor) -> ClassResult:
        if cancel is not None and cancel.is_set():
            return ClassResult(cls.qualified_name, Outcome.SKIPPED, diagnostic="cancelled")
        return generate_class(cls, schema, config, sink)

    classes = schema.persistent_classes()
    if workers <= 1:
        return BatchResult(tuple(run(cls) for cls in classes))

    with ThreadPoolExecutor(max_workers=workers) as pool:
        return BatchResult(tuple(pool.map(run, classes)))

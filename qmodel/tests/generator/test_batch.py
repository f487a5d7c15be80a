"""Tests for whole-schema generation."""

import logging
import os
import threading

import pytest

from qmodel.generator import (
    GenerationConfig,
    MemorySink,
    Outcome,
    SchemaIndex,
    SinkWriteError,
    generate_all,
    load_schema,
    parse,
)

FILE_DIR = os.path.dirname(os.path.realpath(__file__))


class FailingSink(MemorySink):
    """Refuses to store the classes named in ``refuse``."""

    def __init__(self, *refuse):
        super().__init__()
        self.refuse = set(refuse)

    def write(self, qualified_name, text):
        if qualified_name in self.refuse:
            raise SinkWriteError(f"disk full writing {qualified_name}")
        super().write(qualified_name, text)


@pytest.fixture
def company():
    return load_schema(f"{FILE_DIR}/company.qm")


def describe_generate_all():
    def generates_every_persistent_class(expect, company):
        sink = MemorySink()
        result = generate_all(company, GenerationConfig(), sink)
        expect(result.ok) == True
        expect([r.source for r in result.generated]) == [
            "company.Party",
            "company.Person",
            "company.Address",
        ]
        expect(sorted(sink.sources)) == ["company.QAddress", "company.QParty", "company.QPerson"]
        expect(sink.sources["company.QParty"]).includes("class QParty(")

    def logs_each_class(expect, company, caplog):
        with caplog.at_level(logging.INFO, logger="qmodel.generator.batch"):
            generate_all(company, GenerationConfig(), MemorySink())
        expect(caplog.text).includes("company.Person -> company.QPerson")

    def skips_classes_without_package(expect):
        schema = SchemaIndex(parse("@persistent class Loose { x: int }"))
        result = generate_all(schema, GenerationConfig(), MemorySink())
        expect(result.ok) == True
        expect(result.skipped[0].source) == "Loose"
        expect(result.skipped[0].diagnostic).includes("package")

    def skips_nested_classes(expect):
        schema = SchemaIndex(
            parse("package p @persistent class Outer { @persistent class Inner { x: int } }")
        )
        sink = MemorySink()
        result = generate_all(schema, GenerationConfig(), sink)
        expect([r.outcome for r in result.results]) == [Outcome.GENERATED, Outcome.SKIPPED]
        expect(result.skipped[0].diagnostic) == (
            "Persistable nested class p.Outer.Inner is not processed, declare it at top level"
        )
        expect(list(sink.sources)) == ["p.QOuter"]

    def continues_after_failed_writes(expect, company):
        sink = FailingSink("company.QPerson")
        result = generate_all(company, GenerationConfig(), sink)
        expect(result.ok) == False
        expect(result.failed[0].source) == "company.Person"
        expect(result.failed[0].diagnostic).includes("disk full")
        expect(sorted(sink.sources)) == ["company.QAddress", "company.QParty"]

    def keeps_order_with_workers(expect):
        text = "package p\n" + "\n".join(
            f"@persistent class C{i} {{ v: int }}" for i in range(20)
        )
        schema = SchemaIndex(parse(text))
        sink = MemorySink()
        result = generate_all(schema, GenerationConfig(), sink, workers=4)
        expect([r.source for r in result.results]) == [f"p.C{i}" for i in range(20)]
        expect(len(sink.sources)) == 20

    def stops_when_cancelled(expect, company):
        cancel = threading.Event()
        cancel.set()
        sink = MemorySink()
        result = generate_all(company, GenerationConfig(), sink, cancel=cancel)
        expect(len(result.skipped)) == 3
        expect(result.skipped[0].diagnostic) == "cancelled"
        expect(sink.sources) == {}

    def generates_subclasses_of_nested_classes_standalone(expect):
        schema = SchemaIndex(
            parse(
                "package q class Outer { @persistent class Inner { x: int } } "
                "@persistent class Leaf extends Outer.Inner { y: int }"
            )
        )
        sink = MemorySink()
        result = generate_all(schema, GenerationConfig(), sink)
        expect([(r.source, r.outcome) for r in result.results]) == [
            ("q.Outer.Inner", Outcome.SKIPPED),
            ("q.Leaf", Outcome.GENERATED),
        ]
        source = sink.sources["q.QLeaf"]
        expect("QInner" in source) == False
        gbl = {"__name__": "generated"}
        exec(source, gbl)
        expect(str(gbl["QLeaf"].candidate().y)) == "this.y"

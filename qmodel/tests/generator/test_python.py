"""Tests for the Python query class emitter."""

import importlib
import os

import pytest

from qmodel.generator import (
    AccessStyle,
    DirectorySink,
    GenerationConfig,
    SchemaIndex,
    generate,
    generate_all,
    load_schema,
    parse,
)
from qmodel.generator.python import render, runtime

FILE_DIR = os.path.dirname(os.path.realpath(__file__))

NODE_SCHEMA = """
package graph

@persistent
class Node {
    label: String
    next: Node
}
"""

PERSON_SCHEMA = """
package people

@persistent
class Person {
    name: String
    age: int
    active: boolean
}

@persistent
class Employee extends Person {
    salary: double
    @notpersistent
    password: String
}
"""


def gen_code(text, cls_name, **config):
    schema = SchemaIndex(parse(text))
    cls = schema.lookup(cls_name)
    return render(generate(cls, schema, GenerationConfig(**config)))


def gen_class(text, cls_name, **config):
    code = gen_code(text, cls_name, **config)
    gbl = {"__name__": "generated"}
    exec(code, gbl)
    return gbl["Q" + cls_name.rsplit(".", 1)[-1]]


def describe_render():
    def is_deterministic(expect):
        first = gen_code(PERSON_SCHEMA, "people.Person")
        second = gen_code(PERSON_SCHEMA, "people.Person")
        expect(first) == second

    def emits_sections_in_order(expect):
        code = gen_code(PERSON_SCHEMA, "people.Person")
        positions = [
            code.index("from qmodel.query import"),
            code.index("class QPerson(PersistableExpressionImpl, PersistableExpression):"),
            code.index("jdo_candidate: ClassVar[QPerson]"),
            code.index("def candidate("),
            code.index("def parameter("),
            code.index("def variable("),
            code.index("__query_fields__"),
            code.index("def __init__("),
            code.index("def _init_root("),
        ]
        expect(positions) == sorted(positions)

    def extends_the_ancestor(expect):
        code = gen_code(PERSON_SCHEMA, "people.Employee")
        expect(code).includes("from people.QPerson import QPerson\n")
        expect(code).includes("class QEmployee(QPerson):")
        expect(code).includes('__query_fields__ = QPerson.__query_fields__ + ("salary",)')
        expect(code).includes("super().__init__(parent, name, depth)")

    def leaves_out_excluded_members(expect):
        code = gen_code(PERSON_SCHEMA, "people.Employee")
        expect("password" in code) == False

    def uses_the_configured_runtime(expect):
        code = gen_code(PERSON_SCHEMA, "people.Person", runtime_import="myapp.qruntime")
        expect(code).includes("from myapp.qruntime import (")

    def writes_accessors_in_property_style(expect):
        code = gen_code(NODE_SCHEMA, "graph.Node", access_style=AccessStyle.PROPERTY)
        expect(code).includes("def next(self) -> QNode:")
        expect(code).includes('self.__next = QNode(self, "next", 5)')
        expect("__query_fields__" in code) == False

    def references_other_classes_lazily(expect):
        code = gen_code(
            "package p @persistent class A { b: B } @persistent class B { a: A }", "p.A"
        )
        expect(code).includes('QB = LazyClass("p.QB", "QB")')

    def compiles_the_sample_schema(expect):
        schema = load_schema(f"{FILE_DIR}/company.qm")
        for cls in schema.persistent_classes():
            for style in AccessStyle:
                code = render(generate(cls, schema, GenerationConfig(access_style=style)))
                compile(code, f"Q{cls.name}.py", "exec")


def describe_field_style():
    def bounds_self_references_by_depth(expect):
        QNode = gen_class(NODE_SCHEMA, "graph.Node", max_depth=2)
        node = QNode.candidate("n")
        expect(node.next.next == None) == False
        expect(node.next.next.next) == None

    def builds_nothing_persistable_at_depth_zero(expect):
        QNode = gen_class(NODE_SCHEMA, "graph.Node", max_depth=0)
        node = QNode.candidate("n")
        expect(node.next) == None
        expect(str(node.label)) == "n.label"

    def builds_members_of_parameters(expect):
        QNode = gen_class(NODE_SCHEMA, "graph.Node", max_depth=1)
        param = QNode.parameter("p")
        expect(param.jdo_is_parameter()) == True
        expect(param.jdo_type_name()) == "graph.Node"
        expect(str(param.next.label)) == "p.next.label"
        expect(param.next.next == None) == False
        expect(param.next.next.next) == None

    def makes_members_read_only(expect):
        QNode = gen_class(NODE_SCHEMA, "graph.Node")
        node = QNode.candidate("n")
        with pytest.raises(AttributeError):
            node.label = None

    def lists_query_fields(expect):
        QNode = gen_class(NODE_SCHEMA, "graph.Node")
        expect(QNode.__query_fields__) == ("label", "next")


def describe_property_style():
    def builds_members_on_first_access(expect):
        QNode = gen_class(NODE_SCHEMA, "graph.Node", access_style=AccessStyle.PROPERTY)
        node = QNode.candidate("n")
        expect(node.next() is node.next()) == True
        expect(node.label() is node.label()) == True

    def builds_nothing_in_the_constructor(expect):
        QNode = gen_class(NODE_SCHEMA, "graph.Node", access_style=AccessStyle.PROPERTY)
        node = QNode.variable("v")
        expect(node._QNode__next) == None
        expect(node.jdo_is_variable()) == True

    def renders_paths(expect):
        QNode = gen_class(NODE_SCHEMA, "graph.Node", access_style=AccessStyle.PROPERTY)
        node = QNode.candidate()
        expect(str(node.next().next().label())) == "this.next.next.label"


def describe_candidate():
    def is_canonical(expect):
        QPerson = gen_class(PERSON_SCHEMA, "people.Person")
        expect(QPerson.candidate() is QPerson.jdo_candidate) == True
        expect(QPerson.candidate() is QPerson.candidate()) == True
        expect(QPerson.candidate().jdo_name()) == "this"

    def differs_from_named_candidates(expect):
        QPerson = gen_class(PERSON_SCHEMA, "people.Person")
        other = QPerson.candidate("p")
        expect(other is QPerson.candidate()) == False
        expect(other.jdo_expression_type()) == None

    def differs_from_parameters(expect):
        QPerson = gen_class(PERSON_SCHEMA, "people.Person")
        param = QPerson.parameter("p")
        expect(param is QPerson.candidate()) == False
        expect(param.jdo_is_parameter()) == True
        expect(param.jdo_name()) == "p"

    def is_read_only(expect):
        QPerson = gen_class(PERSON_SCHEMA, "people.Person")
        with pytest.raises(AttributeError):
            QPerson.candidate().jdo_candidate = None
        with pytest.raises(AttributeError):
            QPerson.jdo_candidate = None
        with pytest.raises(AttributeError):
            del QPerson.jdo_candidate

    def builds_query_text(expect):
        QPerson = gen_class(PERSON_SCHEMA, "people.Person")
        person = QPerson.candidate()
        expr = person.name.startswith("Jo") & person.age.gt(18)
        expect(str(expr)) == '(this.name.startsWith("Jo") && this.age > 18)'
        expect(str(~person.active)) == "!(this.active)"


def describe_generated_packages():
    @pytest.fixture
    def company(import_root):
        schema = load_schema(f"{FILE_DIR}/company.qm")
        result = generate_all(schema, GenerationConfig(max_depth=2), DirectorySink(import_root))
        assert result.ok
        importlib.invalidate_caches()
        return import_root

    def writes_one_module_per_persistent_class(expect, company):
        expect(sorted(p.name for p in (company / "company").glob("*.py"))) == [
            "QAddress.py",
            "QParty.py",
            "QPerson.py",
            "__init__.py",
        ]

    def wires_the_ancestor(expect, company):
        QParty = importlib.import_module("company.QParty").QParty
        QPerson = importlib.import_module("company.QPerson").QPerson
        expect(issubclass(QPerson, QParty)) == True
        expect(QPerson.__query_fields__[:1]) == ("name",)
        expect(str(QPerson.candidate().name)) == "this.name"

    def resolves_mutual_references(expect, company):
        QAddress = importlib.import_module("company.QAddress").QAddress
        address = QAddress.candidate()
        expect(str(address.resident.address.city)) == "this.resident.address.city"
        expect(str(address.resident.salary.gt(1000))) == "this.resident.salary > 1000"

    def exposes_accessor_properties(expect, company):
        QPerson = importlib.import_module("company.QPerson").QPerson
        person = QPerson.parameter("p")
        expect(str(person.nickname)) == "p.nickname"
        expect(str(person.retired)) == "p.retired"
        expect(hasattr(person, "note")) == False


def describe_runtime():
    def includes_the_runtime_files(expect):
        files = runtime()
        expect(sorted(files)) == ["__init__.py", "expressions.py", "persistable.py", "types.py"]
        expect(files["persistable.py"]).includes("class PersistableExpressionImpl")


def describe_redeclared_members():
    @pytest.fixture
    def hiding(import_root):
        schema = SchemaIndex(
            parse(
                "package hiding @persistent class A { name: String  code: String } "
                "@persistent class B extends A { name: int }"
            )
        )
        result = generate_all(schema, GenerationConfig(), DirectorySink(import_root))
        assert result.ok
        importlib.invalidate_caches()
        return importlib.import_module("hiding.QB").QB

    def builds_the_subclass(expect, hiding):
        b = hiding.candidate("x")
        expect(str(b.name.gt(3))) == "x.name > 3"
        expect(str(b.code)) == "x.code"

    def keeps_query_fields_unique(expect, hiding):
        expect(hiding.__query_fields__) == ("name", "code")

    def builds_roots(expect, hiding):
        b = hiding.parameter("p")
        expect(b.jdo_is_parameter()) == True
        expect(type(b.name).__name__) == "NumericExpressionImpl"

    def stays_read_only(expect, hiding):
        b = hiding.candidate("x")
        with pytest.raises(AttributeError):
            b.name = None

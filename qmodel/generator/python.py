"""Python source emitter for query classes."""

from importlib import resources

from jinja2 import Environment, PackageLoader

from .classgen import GeneratedClass

RUNTIME_FILES = [
    "__init__.py",
    "expressions.py",
    "persistable.py",
    "types.py",
]

env = Environment(
    loader=PackageLoader("qmodel.generator", "templates"),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
    line_comment_prefix="%%",
    line_statement_prefix="%",
)

template = env.get_template("query_class.py.j2")


def _names_tuple(names: tuple[str, ...]) -> str:
    """Render member names as a tuple literal."""
    quoted = [f'"{name}"' for name in names]
    if len(quoted) == 1:
        return f"({quoted[0]},)"
    return "(" + ", ".join(quoted) + ")"


def render(cls: GeneratedClass) -> str:
    """Render a query class description to Python source code."""
    return template.render(cls=cls, names_tuple=_names_tuple)


def runtime() -> dict[str, str]:
    """Return the query runtime files as a dict of filename -> content."""
    result: dict[str, str] = {}
    for filename in RUNTIME_FILES:
        content = resources.files("qmodel.query").joinpath(filename).read_text()
        result[filename] = content
    return result

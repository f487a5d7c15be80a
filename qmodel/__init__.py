"""qmodel - Typed query metamodel generator for persistent classes."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("qmodel")
except PackageNotFoundError:
    __version__ = "(local)"

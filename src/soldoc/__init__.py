"""soldoc: documentation view-models for Solidity compiler ASTs."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("soldoc")
except PackageNotFoundError:
    __version__ = "dev"

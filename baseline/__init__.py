"""Scan web source trees for Baseline web platform features."""

from ._version import __version__
from .catalog import Catalog, load_catalog
from .scanner import scan, scan_units

__all__ = ["Catalog", "__version__", "load_catalog", "scan", "scan_units"]

# src/netlist_core/cache/__init__.py
"""
Exposes the public interface of the cache package.
"""
from .service import CoincidenceCache
from .keys import create_coincidence_key

__all__ = [
    "CoincidenceCache",
    "create_coincidence_key",
]

"""
store package
-------------
Persistence of focus logs in a vault of markdown notes.
"""
from .vault import VaultStore

__all__ = ["VaultStore"]

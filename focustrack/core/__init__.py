"""
core package
------------
Shared infrastructure: logging, exceptions, validation, paths and
the built-in symbol tables.
"""

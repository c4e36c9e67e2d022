"""
DocGuard Core - base-directory security gate for document generation.

Every file the document tooling reads or writes is checked here first:
the project root is validated once, then each requested path is
canonicalized and confined to that root.
"""

__version__ = "0.1.0"

# pkidecl/__init__.py

"""
pkidecl - Declarative PKI compiler
==================================

This module compiles a declarative description of key pairs, entities, certificates and
certificate requests into a validated document, and generates the keys, certificates and
CSRs it describes using pyca/cryptography.
"""

# ---- Package metadata ----
__version__ = "0.4.0"
__title__ = "Declarative PKI Compiler"
__short_title__ = "pkidecl"
__license__ = "MPL-2.0"


# ---- Public exports ----
__all__ = [
    "__version__",
    "__title__",
    "__short_title__",
    "__license__",
]

# pkidecl/services/__init__.py

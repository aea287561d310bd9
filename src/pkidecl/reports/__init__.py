# pkidecl/reports/__init__.py

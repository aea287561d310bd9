# pkidecl/utils/__init__.py

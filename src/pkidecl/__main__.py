# pkidecl/__main__.py

from pkidecl.cli import main

if __name__ == "__main__":
    raise SystemExit(main())

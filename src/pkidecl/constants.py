# pkidecl/constants.py

from __future__ import annotations

"""
Exit codes returned by the pkidecl CLI.

0 = success
1 = the document was rejected (decode, structural, reference or extension errors)
2 = fatal errors (missing key material, unhandled exceptions)
"""
EXIT_OK: int = 0
EXIT_VALIDATION_ERROR: int = 1
EXIT_FATAL: int = 2

# ---- ANSI Colour Codes ----
COLOUR = {
    'green': '\033[32m',
    'cyan': '\033[36m',
    'white': '\033[37m',
    'bold_red': '\033[1;31m',
    'bold_green': '\033[1;32m',
    'bold_yellow': '\033[1;33m',
    'bold_white': '\033[1;37m',
    'bright_white': '\033[97m',
    'reset': '\033[0m'
}

COLOUR_ERROR = COLOUR['bold_red']
COLOUR_OK = COLOUR['green']
COLOUR_BRIGHT = COLOUR['bold_white']
COLOUR_WARNING = COLOUR['bold_yellow']
COLOUR_RESET = COLOUR['reset']

# ---- Cryptographic defaults ----
DEFAULT_RSA_KEY_SIZE = 2048
DEFAULT_RSA_PUBLIC_EXPONENT = 65537
DEFAULT_DIGEST_ALGORITHM = 'sha-256'

# RFC 5280 4.1.2.2: serial numbers are at most 20 octets
MAX_SERIAL_OCTETS = 20

# ---- Output defaults ----
DEFAULT_OUTPUT_DIR = '.'

ARTIFACT_SUFFIX = {
    'key': '.key.pem',
    'certificate': '.cert.pem',
    'request': '.csr.pem',
}

ARTIFACT_MODE = {
    'key': 0o600,
    'certificate': 0o644,
    'request': 0o644,
}

# Column the [ OK ] / [ FAILED ] status is printed in
STATUS_COLUMN = 90

# pkidecl/utils/formatting.py

from __future__ import annotations

import sys
from typing import Optional

from pkidecl.constants import COLOUR, COLOUR_BRIGHT, COLOUR_RESET
from pkidecl.constants import COLOUR_ERROR, COLOUR_OK, COLOUR_WARNING
from pkidecl.constants import STATUS_COLUMN

# Heading colour per title level
HEADING_COLOUR = {
    1: COLOUR['bold_yellow'],
    2: COLOUR['bold_yellow'],
    3: COLOUR['bold_white'],
}

BANNER = '---===oooO'


def title(text: str, level: int = 1, extra: Optional[str] = None) -> None:
    """
    Print a heading for a section of console output

    Args:
        text (str): The heading text
        level (int): 1 is the program banner, 2 a command, 3 a report section.
            Level 9 prints an unterminated progress line to be closed by print_result().
        extra (str): Banner decoration at level 1, a highlighted detail at level 2
    """
    if level == 9:
        print(f'{text}...', end='')
        return

    colour = HEADING_COLOUR.get(level, COLOUR['cyan'])
    heading = f'{colour}{text}{COLOUR_RESET}'

    if level == 1:
        banner = extra or BANNER
        heading = f'{banner} {heading} {banner[::-1]}'
    elif level == 2 and extra is not None:
        heading = f'{heading} [ {COLOUR_BRIGHT}{extra}{COLOUR_RESET} ]'

    print(f'{heading}\n')

def print_result(success: bool, *, ok_msg: str = '  OK  ', failed_msg: str = 'FAILED') -> bool:
    """
    Close a level 9 progress line with a coloured status in a fixed column
    """
    msg, colour = (ok_msg, COLOUR_OK) if success else (failed_msg, COLOUR_ERROR)

    print(f'\033[{STATUS_COLUMN}G[ {colour}{msg}{COLOUR_RESET} ]')

    return success

def error(text: str, exit_code: int = 0) -> None:
    """
    Print an error message, exiting with exit_code unless it is 0
    """
    print(f'{COLOUR_ERROR}Error:{COLOUR_RESET} {text}')

    if exit_code:
        sys.exit(exit_code)

def warning(text: str) -> None:
    print(f'{COLOUR_WARNING}Warning:{COLOUR_RESET} {text}')

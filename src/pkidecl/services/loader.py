# pkidecl/services/loader.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence, Union

import yaml
from pydantic import ValidationError

from pkidecl.models.document import Document
from pkidecl.services.pki_errors import DecodeError
from pkidecl.services.validator import validate_document
from pkidecl.utils.files import read_bytes

log = logging.getLogger(__name__)


def _format_location(loc: Sequence[Union[str, int]]) -> str:
    """ ('certificates', 0, 'issuer-key') -> certificates[0].issuer-key """

    text = ''
    for part in loc:
        if isinstance(part, int):
            text += f'[{part}]'
        else:
            text += f'.{part}' if text else str(part)
    return text or '<document>'


def _describe(source: str, exc: ValidationError) -> str:
    errors = exc.errors()
    first = errors[0]
    message = f"{source}: {_format_location(first['loc'])}: {first['msg']}"

    if len(errors) > 1:
        message += f" (and {len(errors) - 1} more)"

    return message


def decode_document(text: str, source: str = '<document>') -> Document:
    """
    Decode YAML (or JSON) text into a Document

    Only record shapes are checked; references between records are not.

    Args:
        text (str): The document source
        source (str): Name used in error messages, usually the file path

    Returns:
        Document

    Raises:
        DecodeError: On syntax errors, missing or unknown fields and malformed values
    """
    try:
        data = yaml.safe_load(text)
    except yaml.MarkedYAMLError as exc:
        mark = exc.problem_mark
        where = f"{source}:{mark.line + 1}:{mark.column + 1}" if mark else source
        raise DecodeError(f"{where}: {exc.problem}") from exc
    except yaml.YAMLError as exc:
        raise DecodeError(f"{source}: {exc}") from exc

    if data is None:
        data = {}

    if not isinstance(data, dict):
        raise DecodeError(f"{source}: the top level of a document must be a mapping")

    try:
        document = Document.model_validate(data)
    except ValidationError as exc:
        raise DecodeError(_describe(source, exc)) from exc

    log.debug("Decoded %s", source)

    return document


def load_document(path: Union[str, Path]) -> Document:
    """ Read and decode a document file """

    raw = read_bytes(path)

    try:
        text = raw.decode('utf-8')
    except UnicodeDecodeError as exc:
        raise DecodeError(f"{path}: not valid UTF-8 ({exc.reason})") from exc

    return decode_document(text, source=str(path))


def load_and_validate(path: Union[str, Path]) -> Document:
    """ Read, decode and validate a document file """

    return validate_document(load_document(path))

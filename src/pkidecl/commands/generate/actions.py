# pkidecl/commands/generate/actions.py

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple, TypeVar

from cryptography.hazmat.primitives import serialization
from pydantic import BaseModel

from pkidecl.commands.helpers import prune_opts
from pkidecl.constants import (
    ARTIFACT_MODE,
    DEFAULT_OUTPUT_DIR,
    EXIT_OK,
    EXIT_FATAL,
    EXIT_VALIDATION_ERROR,
    COLOUR_BRIGHT,
    COLOUR_RESET,
)
from pkidecl.models.app import App
from pkidecl.services.backend import (
    PrivateKey,
    Signer,
    generate_key_pair,
    load_private_key_pem,
    private_key_to_pem,
)
from pkidecl.services.pki_errors import PKIError
from pkidecl.utils.files import artifact_path, read_bytes, write_bytes
from pkidecl.utils.formatting import error, print_result, title, warning

log = logging.getLogger(__name__)

Named = TypeVar("Named")
Built = TypeVar("Built")


class GenerateOptions(BaseModel):
    output_dir: Path = Path(DEFAULT_OUTPUT_DIR)
    overwrite: bool = False
    only: Optional[List[str]] = None


def _select(items: Sequence[Named], only: Optional[List[str]], kind: str) -> Optional[List[Named]]:
    """
    Filter records down to the names given with --only.
    Returns None (after printing an error) if a name is unknown.
    """
    if not only:
        return list(items)

    known = {item.name for item in items}
    unknown = [name for name in only if name not in known]

    if unknown:
        error(f"Unknown {kind}: {', '.join(unknown)}")
        return None

    return [item for item in items if item.name in only]

def _load_keys(names: Iterable[str], output_dir: Path) -> Optional[Dict[str, PrivateKey]]:
    """
    Load previously generated private keys.
    Returns None (after printing an error) if any key has not been generated.
    """
    keys: Dict[str, PrivateKey] = {}

    for name in sorted(set(names)):
        path = artifact_path(output_dir, name, 'key')

        if not path.exists():
            error(f"Private key for key pair '{name}' not found at {path}. "
                  "Run 'generate key-pairs' first.")
            return None

        keys[name] = load_private_key_pem(read_bytes(path), name)
        log.debug("Loaded private key %s from %s", name, path)

    return keys

def _build(label: str, name: str, build: Callable[[], Built]) -> Built:
    """
    Run one build step behind a progress line, closing it with FAILED if it raises.
    """
    title(f'{label} {COLOUR_BRIGHT}{name}{COLOUR_RESET}', 9)

    try:
        result = build()
    except PKIError:
        print_result(False)
        raise

    print_result(True)

    return result

def _write_artifacts(artifacts: List[Tuple[Path, bytes]], opts: GenerateOptions,
        artifact: str) -> None:
    """
    Write artifacts that have all been built. Nothing is written if any target
    exists and --overwrite was not given.
    """
    if not opts.overwrite:
        existing = [str(path) for path, _ in artifacts if path.exists()]
        if existing:
            error(f"Already exists: {', '.join(existing)}. Use --overwrite to replace.", 1)

    for path, data in artifacts:
        write_bytes(path, data, overwrite=opts.overwrite, create_dirs=True,
                    mode=ARTIFACT_MODE[artifact])
        log.info("Wrote %s", path)

def handle_generate_key_pairs(app: App) -> int:
    title("Generate Key Pairs", level=2)

    opts = prune_opts(GenerateOptions, app.args)

    key_pairs = _select(app.document.key_pairs, opts.only, "key pair")
    if key_pairs is None:
        return EXIT_VALIDATION_ERROR

    artifacts: List[Tuple[Path, bytes]] = []

    for key_pair in key_pairs:
        private_key = _build('Generating key pair', key_pair.name,
                             lambda: generate_key_pair(key_pair))
        artifacts.append((artifact_path(opts.output_dir, key_pair.name, 'key'),
                          private_key_to_pem(private_key)))

    if opts.overwrite:
        for path, _ in artifacts:
            if path.exists():
                warning(f"Replacing {path}; certificates signed with the old key no longer match it")

    _write_artifacts(artifacts, opts, 'key')

    return EXIT_OK

def handle_generate_certificates(app: App) -> int:
    title("Generate Certificates", level=2)

    opts = prune_opts(GenerateOptions, app.args)

    certificates = _select(app.document.certificates, opts.only, "certificate")
    if certificates is None:
        return EXIT_VALIDATION_ERROR

    needed = [name for cert in certificates for name in (cert.subject_key, cert.issuer_key)]
    keys = _load_keys(needed, opts.output_dir)
    if keys is None:
        return EXIT_FATAL

    signer = Signer(app.document, keys)
    artifacts: List[Tuple[Path, bytes]] = []

    for cert in certificates:
        certificate = _build('Signing certificate', cert.name,
                             lambda: signer.build_certificate(cert))
        artifacts.append((artifact_path(opts.output_dir, cert.name, 'certificate'),
                          certificate.public_bytes(serialization.Encoding.PEM)))

    _write_artifacts(artifacts, opts, 'certificate')

    return EXIT_OK

def handle_generate_certificate_requests(app: App) -> int:
    title("Generate Certificate Requests", level=2)

    opts = prune_opts(GenerateOptions, app.args)

    requests = _select(app.document.certificate_requests, opts.only, "certificate request")
    if requests is None:
        return EXIT_VALIDATION_ERROR

    keys = _load_keys((request.subject_key for request in requests), opts.output_dir)
    if keys is None:
        return EXIT_FATAL

    signer = Signer(app.document, keys)
    artifacts: List[Tuple[Path, bytes]] = []

    for request in requests:
        csr = _build('Building certificate request', request.name,
                     lambda: signer.build_certificate_request(request))
        artifacts.append((artifact_path(opts.output_dir, request.name, 'request'),
                          csr.public_bytes(serialization.Encoding.PEM)))

    _write_artifacts(artifacts, opts, 'request')

    return EXIT_OK

# pkidecl/commands/helpers.py

from __future__ import annotations

import argparse
from typing import Type, TypeVar
from pydantic import BaseModel

OptionsModel = TypeVar("OptionsModel", bound=BaseModel)

def prune_opts(model: Type[OptionsModel], ns: argparse.Namespace) -> OptionsModel:
    """
    Prune an argparse namespace down to fields the Pydantic model knows about,
    then validate. Unknown args (config, log_level, handler, etc.) are ignored.
    """
    data = vars(ns)
    allowed = model.model_fields.keys()
    pruned = {k: data[k] for k in allowed if k in data and data[k] is not None}

    return model.model_validate(pruned)

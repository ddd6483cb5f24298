"""
Static YAML dictionaries shipped with the package.

Usage:
    from shared.dictionaries import load_dictionary

    taxonomy = load_dictionary("taxonomy")
"""
import pathlib
from functools import lru_cache
from typing import Any

import yaml

ROOT = pathlib.Path(__file__).resolve().parent


@lru_cache
def load_dictionary(name: str) -> Any:
    """
    Load `<name>.yaml` from this directory (cached per process).

    Callers must not mutate the returned structure.
    """
    return yaml.safe_load((ROOT / f"{name}.yaml").read_text(encoding="utf-8"))

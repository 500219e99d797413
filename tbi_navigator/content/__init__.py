"""Helpers to load the clinical reference packs shipped with the package."""

from __future__ import annotations

from functools import lru_cache
from importlib import resources
from typing import Any, Dict

import yaml

from ..errors import ReferenceDataError

__all__ = ["load_pack"]


@lru_cache(maxsize=8)
def load_pack(pack_id: str) -> Dict[str, Any]:
    """Load the YAML reference pack identified by *pack_id*."""

    resource = resources.files(__name__).joinpath("reference_packs").joinpath(f"{pack_id}.yml")
    if not resource.is_file():
        raise ReferenceDataError(f"Reference pack '{pack_id}' not found", details={"pack": pack_id})
    with resource.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    if not isinstance(data, dict):
        raise ReferenceDataError(f"Reference pack '{pack_id}' is not a mapping", details={"pack": pack_id})
    return data

"""
core/mixing_eval/_challenge_loader.py — Load the bundled challenge catalog.

Uses importlib.resources (stdlib) to read YAML files bundled in the
core/mixing_eval/challenges/ package. Each file holds a ``challenges`` list;
entries are parsed with schema.parse_challenge and indexed by id. The parsed
catalog is cached in a module-level dict so each YAML file is read only once
per process.
"""

from __future__ import annotations

import importlib.resources
import logging
from typing import Any

import yaml  # PyYAML

from core.mixing_eval.schema import parse_challenge
from core.mixing_eval.types import Challenge

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Catalog files, in curriculum order
# ---------------------------------------------------------------------------

_CATALOG_FILES: tuple[str, ...] = (
    "fundamentals.yaml",
    "multitrack.yaml",
)

_CACHE: dict[str, Challenge] = {}


def _load_catalog() -> dict[str, Challenge]:
    if _CACHE:
        return _CACHE

    pkg = importlib.resources.files("core.mixing_eval.challenges")
    catalog: dict[str, Challenge] = {}
    for filename in _CATALOG_FILES:
        text = (pkg / filename).read_text(encoding="utf-8")
        data: dict[str, Any] = yaml.safe_load(text) or {}
        entries = data.get("challenges") or []
        for entry in entries:
            challenge = parse_challenge(entry)
            if challenge.id in catalog:
                raise ValueError(f"Duplicate challenge id {challenge.id!r} in {filename}")
            catalog[challenge.id] = challenge
        logger.debug("Loaded %d challenges from %s", len(entries), filename)

    _CACHE.update(catalog)
    return _CACHE


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------


def load_challenge(challenge_id: str) -> Challenge:
    """Return the bundled challenge with the given id.

    Args:
        challenge_id: Challenge id, e.g. 'f1-01-warm-it-up'. Case-insensitive.

    Raises:
        ValueError: If no bundled challenge has this id.
    """
    key = challenge_id.lower().strip()
    catalog = _load_catalog()
    challenge = catalog.get(key)
    if challenge is None:
        raise ValueError(f"Unknown challenge {challenge_id!r}. Available: {sorted(catalog)}")
    return challenge


def available_challenges(module: str | None = None) -> list[str]:
    """Return bundled challenge ids in catalog order, optionally for one module."""
    catalog = _load_catalog()
    if module is None:
        return list(catalog)
    wanted = module.upper().strip()
    return [cid for cid, c in catalog.items() if c.module.upper() == wanted]

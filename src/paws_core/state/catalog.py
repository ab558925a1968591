"""
YAML ailment catalogs.

Callers can replace the built-in ailment table with their own file:

    ailments:
      - id: kennel_cough
        name: Kennel Cough
        kind: illness
        severity: mild
        treatment_cost: 150
        recovery_hours: 48
        health_impact: -15
        stat_impact:
          endurance: -3

The loaded mapping is passed to the ailment system as ``catalog=``.
"""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from .schema import Ailment

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    """A catalog file is missing, unparseable, or has invalid entries."""


def parse_ailment_catalog(data: object) -> dict[str, Ailment]:
    """Validate already-parsed YAML data into an id -> Ailment mapping."""
    if isinstance(data, dict):
        data = data.get("ailments")
    if not isinstance(data, list):
        raise CatalogError("Expected a list of ailments under 'ailments'")

    catalog: dict[str, Ailment] = {}
    for index, entry in enumerate(data):
        try:
            ailment = Ailment.model_validate(entry)
        except ValidationError as e:
            raise CatalogError(f"Invalid ailment at position {index}: {e}") from e
        if ailment.id in catalog:
            raise CatalogError(f"Duplicate ailment id: {ailment.id}")
        catalog[ailment.id] = ailment

    if not catalog:
        raise CatalogError("Ailment catalog is empty")
    return catalog


def load_ailment_catalog(path: Path | str) -> dict[str, Ailment]:
    """Load and validate an ailment catalog from a YAML file."""
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except OSError as e:
        raise CatalogError(f"Cannot read ailment catalog {path}: {e}") from e
    except yaml.YAMLError as e:
        raise CatalogError(f"Malformed YAML in {path}: {e}") from e

    catalog = parse_ailment_catalog(data)
    logger.info(f"Loaded {len(catalog)} ailments from {path}")
    return catalog


def dump_ailment_catalog(catalog: dict[str, Ailment], path: Path | str) -> None:
    """Write a catalog back out in the format load_ailment_catalog reads."""
    entries = [a.model_dump(mode="json") for a in catalog.values()]
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump({"ailments": entries}, f, sort_keys=False, allow_unicode=True)

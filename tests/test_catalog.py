"""Tests for YAML ailment catalogs."""

import pytest

from paws_core.state import AilmentKind, CatalogError, StatName, load_ailment_catalog
from paws_core.state.catalog import dump_ailment_catalog, parse_ailment_catalog
from paws_core.systems import ailments

from conftest import ScriptedRng


CATALOG_YAML = """\
ailments:
  - id: flea_bites
    name: Flea Bites
    kind: illness
    severity: mild
    treatment_cost: 60
    recovery_hours: 12
    health_impact: -5
  - id: thorn_in_paw
    name: Thorn in Paw
    kind: injury
    severity: mild
    treatment_cost: 80
    recovery_hours: 24
    health_impact: -8
    stat_impact:
      speed: -2
"""


class TestLoad:
    def test_load_yaml(self, tmp_path):
        path = tmp_path / "ailments.yaml"
        path.write_text(CATALOG_YAML, encoding="utf-8")

        catalog = load_ailment_catalog(path)
        assert list(catalog) == ["flea_bites", "thorn_in_paw"]
        assert catalog["thorn_in_paw"].stat_impact == {StatName.SPEED: -2}

    def test_bare_list_accepted(self):
        catalog = parse_ailment_catalog([
            {"id": "x", "name": "X", "kind": "illness", "severity": "mild",
             "treatment_cost": 1, "recovery_hours": 1, "health_impact": 0},
        ])
        assert "x" in catalog

    def test_loaded_catalog_drives_selection(self, tmp_path):
        path = tmp_path / "ailments.yaml"
        path.write_text(CATALOG_YAML, encoding="utf-8")
        catalog = load_ailment_catalog(path)

        chosen = ailments.select_ailment(ScriptedRng([0.0]), kind=AilmentKind.INJURY, catalog=catalog)
        assert chosen.id == "thorn_in_paw"

    def test_dump_then_load(self, tmp_path):
        path = tmp_path / "builtin.yaml"
        dump_ailment_catalog(ailments.AILMENTS, path)
        assert load_ailment_catalog(path) == ailments.AILMENTS


class TestErrors:
    """Bad catalogs raise CatalogError with a reason."""

    def test_missing_file(self, tmp_path):
        with pytest.raises(CatalogError, match="Cannot read"):
            load_ailment_catalog(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("ailments: [unclosed", encoding="utf-8")
        with pytest.raises(CatalogError, match="Malformed YAML"):
            load_ailment_catalog(path)

    def test_positive_health_impact_rejected(self):
        with pytest.raises(CatalogError, match="position 0"):
            parse_ailment_catalog({"ailments": [
                {"id": "x", "name": "X", "kind": "illness", "severity": "mild",
                 "treatment_cost": 1, "recovery_hours": 1, "health_impact": 10},
            ]})

    def test_duplicate_ids_rejected(self):
        entry = {"id": "x", "name": "X", "kind": "injury", "severity": "mild",
                 "treatment_cost": 1, "recovery_hours": 1, "health_impact": -1}
        with pytest.raises(CatalogError, match="Duplicate"):
            parse_ailment_catalog([entry, entry])

    def test_empty_rejected(self):
        with pytest.raises(CatalogError, match="empty"):
            parse_ailment_catalog({"ailments": []})

    def test_wrong_shape_rejected(self):
        with pytest.raises(CatalogError):
            parse_ailment_catalog("just a string")

"""Tests for the paws command-line interface."""

import json

import pytest

from paws_core.config import load_config, save_config
from paws_core.interface.cli import build_parser, main
from paws_core.state import JsonKennelStore, Kennel, Owner, read_kennel_file, write_kennel_file

from conftest import NOW, make_dog


AT = NOW.isoformat()


@pytest.fixture
def kennel_file(tmp_path):
    kennel = Kennel(
        owner=Owner(name="Sam", cash=500),
        dogs=[make_dog(hours_ago=30, training_points=0,
                       obedience_trained=20, intelligence=10, trainability=10)],
    )
    path = tmp_path / "kennel.json"
    write_kennel_file(kennel, path)
    return path


def run(tmp_path, *args):
    return main(["--config-dir", str(tmp_path), *args])


class TestParser:
    def test_subcommand_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_compete_choices(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["compete", "k.json", "Rex", "frisbee", "local"])


class TestKennelCommand:
    def test_level_table(self, tmp_path, capsys):
        assert run(tmp_path, "kennel", "3") == 0
        out = capsys.readouterr().out
        assert "Next upgrade: $2000" in out
        assert "Unlocked at level 3: Training yard, Improved storage" in out

    def test_max_level(self, tmp_path, capsys):
        assert run(tmp_path, "kennel", "10") == 0
        assert "Maximum level reached" in capsys.readouterr().out


class TestStatusCommand:
    def test_status_does_not_write(self, tmp_path, kennel_file, capsys):
        before = kennel_file.read_text(encoding="utf-8")
        assert run(tmp_path, "status", str(kennel_file), "--at", AT) == 0

        out = capsys.readouterr().out
        assert "Rex" in out
        assert "Sam" in out
        assert kennel_file.read_text(encoding="utf-8") == before

    def test_missing_file(self, tmp_path, capsys):
        assert run(tmp_path, "status", str(tmp_path / "nope.json")) == 1
        assert "Could not load kennel file" in capsys.readouterr().out

    def test_bad_catalog_reported(self, tmp_path, kennel_file, capsys):
        save_config({"ailment_catalog": str(tmp_path / "missing.yaml")}, tmp_path)
        assert run(tmp_path, "status", str(kennel_file), "--at", AT) == 1
        assert "Cannot read ailment catalog" in capsys.readouterr().out


class TestTickCommand:
    def test_tick_saves(self, tmp_path, kennel_file):
        assert run(tmp_path, "tick", str(kennel_file), "--at", AT, "--no-illness") == 0

        dog = read_kennel_file(kennel_file).dogs[0]
        assert dog.training_points == 89
        assert dog.last_training_reset == NOW
        assert kennel_file.with_suffix(".json.bak").exists()

    def test_tick_twice_is_stable(self, tmp_path, kennel_file):
        run(tmp_path, "tick", str(kennel_file), "--at", AT, "--no-illness")
        first = json.loads(kennel_file.read_text(encoding="utf-8"))
        run(tmp_path, "tick", str(kennel_file), "--at", AT, "--no-illness")
        assert json.loads(kennel_file.read_text(encoding="utf-8")) == first


class TestCompeteCommand:
    def test_dry_run(self, tmp_path, kennel_file, capsys):
        before = kennel_file.read_text(encoding="utf-8")
        assert run(tmp_path, "compete", str(kennel_file), "rex", "obedience", "local", "--seed", "1") == 0
        assert "Rex placed #1" in capsys.readouterr().out
        assert kennel_file.read_text(encoding="utf-8") == before

    def test_rejected_entry(self, tmp_path, kennel_file, capsys):
        assert run(tmp_path, "compete", str(kennel_file), "rex", "obedience", "national") == 2
        assert "requires 25 regional wins" in capsys.readouterr().out

    def test_unknown_dog(self, tmp_path, kennel_file, capsys):
        assert run(tmp_path, "compete", str(kennel_file), "Fido", "agility", "local") == 1
        assert "No dog named" in capsys.readouterr().out


class TestKennelsDir:
    """Kennel ids resolve inside the configured kennels_dir."""

    @pytest.fixture
    def store(self, tmp_path):
        kennels_dir = tmp_path / "kennels"
        save_config({"kennels_dir": str(kennels_dir)}, tmp_path)
        store = JsonKennelStore(kennels_dir)
        store.save(Kennel(id="home", owner=Owner(name="Sam"), dogs=[make_dog()]))
        return store

    def test_list(self, tmp_path, store, capsys):
        assert run(tmp_path, "list") == 0
        out = capsys.readouterr().out
        assert "home" in out
        assert "Sam" in out

    def test_list_empty(self, tmp_path, capsys):
        save_config({"kennels_dir": str(tmp_path / "empty")}, tmp_path)
        assert run(tmp_path, "list") == 0
        assert "No kennels in" in capsys.readouterr().out

    def test_status_by_id(self, tmp_path, store, capsys):
        assert run(tmp_path, "status", "home", "--at", AT) == 0
        assert "Rex" in capsys.readouterr().out

    def test_tick_by_id_saves_in_store(self, tmp_path, store):
        assert run(tmp_path, "tick", "home", "--at", AT, "--no-illness") == 0
        assert (store.kennels_dir / "home.json.bak").exists()
        assert store.load("home").dogs[0].name == "Rex"


class TestSeedCommand:
    def test_save_and_clear(self, tmp_path):
        assert run(tmp_path, "seed", "7") == 0
        assert load_config(tmp_path)["seed"] == 7

        assert run(tmp_path, "seed", "--clear") == 0
        assert load_config(tmp_path)["seed"] is None

    def test_show(self, tmp_path, capsys):
        save_config({"seed": 3}, tmp_path)
        assert run(tmp_path, "seed") == 0
        assert "Seed: 3" in capsys.readouterr().out

"""
Kennel storage abstraction.

Systems never persist anything; they return deltas. A store holds the one
authoritative copy of each kennel and merges those deltas into it.
"""

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

from pydantic import BaseModel, Field, ValidationError

from .schema import Delta, Dog, Owner, apply_delta, generate_id

logger = logging.getLogger(__name__)


class Kennel(BaseModel):
    """An owner and the dogs they keep. The unit of persistence."""
    id: str = Field(default_factory=generate_id)
    owner: Owner = Field(default_factory=Owner)
    dogs: list[Dog] = Field(default_factory=list)

    def get_dog(self, key: str) -> Dog | None:
        """Find a dog by id or (case-insensitive) name."""
        for dog in self.dogs:
            if dog.id == key:
                return dog
        lowered = key.lower()
        for dog in self.dogs:
            if dog.name.lower() == lowered:
                return dog
        return None

    def replace_dog(self, dog: Dog) -> "Kennel":
        """New kennel with the dog of the same id swapped in."""
        dogs = [dog if d.id == dog.id else d for d in self.dogs]
        return self.model_copy(update={"dogs": dogs})


@runtime_checkable
class KennelStore(Protocol):
    """
    Abstract storage interface for kennels.

    Implementations:
    - JsonKennelStore: File-based persistence (production)
    - MemoryKennelStore: In-memory storage (testing)
    """

    def save(self, kennel: Kennel) -> None:
        """Persist a kennel."""
        ...

    def load(self, kennel_id: str) -> Kennel | None:
        """Load a kennel by ID. Returns None if not found."""
        ...

    def delete(self, kennel_id: str) -> bool:
        """Delete a kennel. Returns True if deleted."""
        ...

    def list_ids(self) -> list[str]:
        """IDs of every stored kennel."""
        ...


def update_dog(store: KennelStore, kennel_id: str, dog_id: str, delta: Delta) -> Dog | None:
    """
    Merge a delta into one stored dog and save.

    The whole snapshot is re-validated before anything is written, so a bad
    delta leaves the stored kennel untouched. Returns the updated dog, or None
    if the kennel or dog doesn't exist.
    """
    kennel = store.load(kennel_id)
    if kennel is None:
        return None
    dog = kennel.get_dog(dog_id)
    if dog is None:
        return None

    updated = apply_delta(dog, delta)
    store.save(kennel.replace_dog(updated))
    return updated


def update_owner(store: KennelStore, kennel_id: str, delta: Delta) -> Owner | None:
    """Merge a delta into a stored kennel's owner and save."""
    kennel = store.load(kennel_id)
    if kennel is None:
        return None

    owner = apply_delta(kennel.owner, delta)
    store.save(kennel.model_copy(update={"owner": owner}))
    return owner


def read_kennel_file(path: Path | str) -> Kennel | None:
    """Parse one kennel JSON file. Unreadable or invalid files yield None."""
    path = Path(path)
    try:
        return Kennel.model_validate_json(path.read_text(encoding="utf-8"))
    except OSError as e:
        logger.warning(f"Cannot read kennel file {path}: {e}")
    except ValidationError as e:
        logger.warning(f"Rejected kennel file {path}: {e.error_count()} validation errors")
    return None


def write_kennel_file(kennel: Kennel, path: Path | str) -> None:
    """Write a kennel to JSON, keeping the previous file as .bak."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.exists():
        backup = path.with_suffix(".json.bak")
        backup.write_text(path.read_text(encoding="utf-8"), encoding="utf-8")

    path.write_text(kennel.model_dump_json(indent=2), encoding="utf-8")


class JsonKennelStore:
    """
    File-based kennel storage using JSON.

    One file per kennel, named by kennel id. The previous save is kept
    alongside as ``<id>.json.bak``.
    """

    def __init__(self, kennels_dir: Path | str = "kennels"):
        self.kennels_dir = Path(kennels_dir)
        self.kennels_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, kennel_id: str) -> Path:
        return self.kennels_dir / f"{kennel_id}.json"

    def save(self, kennel: Kennel) -> None:
        """Save kennel to JSON file with backup."""
        write_kennel_file(kennel, self._path(kennel.id))
        logger.info(f"Saved kennel {kennel.id} ({len(kennel.dogs)} dogs)")

    def load(self, kennel_id: str) -> Kennel | None:
        """Load kennel by ID. Missing or invalid files return None."""
        path = self._path(kennel_id)
        if not path.exists():
            return None
        return read_kennel_file(path)

    def delete(self, kennel_id: str) -> bool:
        """Delete kennel file."""
        path = self._path(kennel_id)
        if path.exists():
            path.unlink()
            return True
        return False

    def list_ids(self) -> list[str]:
        """Kennel IDs on disk, sorted."""
        return sorted(
            f.stem for f in self.kennels_dir.glob("*.json")
            if not f.name.startswith(".")
        )


class MemoryKennelStore:
    """
    In-memory kennel storage for testing.

    No file I/O - all data lives in memory.
    """

    def __init__(self):
        self.kennels: dict[str, Kennel] = {}

    def save(self, kennel: Kennel) -> None:
        self.kennels[kennel.id] = kennel

    def load(self, kennel_id: str) -> Kennel | None:
        return self.kennels.get(kennel_id)

    def delete(self, kennel_id: str) -> bool:
        if kennel_id in self.kennels:
            del self.kennels[kennel_id]
            return True
        return False

    def list_ids(self) -> list[str]:
        return sorted(self.kennels)

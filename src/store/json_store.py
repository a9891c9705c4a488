# src/store/json_store.py — v2
"""JSON file-backed profile store (PROFILE_STORE_BACKEND=json).

One JSON file per profile under the store root, holding the profile, its
embedding record and its insertion sequence number. File names are the
SHA-256 of the profile id; the id itself lives in the payload. Files are
loaded once on construction, in insertion order. Every write lands on disk
before the in-memory view changes.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path

from pydantic import ValidationError

from donormatch.core.models import Profile, ProfileEmbedding
from donormatch.store.memory_store import InMemoryProfileStore, _make_record

logger = logging.getLogger(__name__)


def entry_filename(profile_id: str) -> str:
    """File name for a profile id; distinct ids never share a file."""
    return hashlib.sha256(profile_id.encode("utf-8")).hexdigest() + ".json"


class JsonProfileStore(InMemoryProfileStore):
    """Write-through profile store persisted as JSON files."""

    def __init__(self, root: Path | str) -> None:
        super().__init__()
        self._root = Path(root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)
        self._seq: dict[str, int] = {}
        self._load()

    def put(self, profile: Profile, embedding: list[float]) -> None:
        record = _make_record(profile, embedding)
        seq = self._seq.get(profile.id, max(self._seq.values(), default=-1) + 1)
        payload = {
            "seq": seq,
            "profile": profile.model_dump(mode="json", by_alias=True),
            "embedding": record.model_dump(mode="json", by_alias=True),
        }
        path = self._entry_path(profile.id)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(json.dumps(payload), encoding="utf-8")
        tmp.replace(path)

        self._seq[profile.id] = seq
        super().put(profile, embedding)

    def delete(self, profile_id: str) -> bool:
        self._entry_path(profile_id).unlink(missing_ok=True)
        self._seq.pop(profile_id, None)
        return super().delete(profile_id)

    def clear(self) -> None:
        for path in self._root.glob("*.json"):
            path.unlink()
        self._seq.clear()
        super().clear()

    def _load(self) -> None:
        """Read every entry file; unreadable files are logged and skipped."""
        entries: list[tuple[int, Profile, ProfileEmbedding]] = []
        for path in self._root.glob("*.json"):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                profile = Profile.model_validate(data["profile"])
                record = ProfileEmbedding.model_validate(data["embedding"])
                seq = int(data.get("seq", 0))
            except (json.JSONDecodeError, KeyError, TypeError, ValueError, ValidationError) as e:
                logger.warning("Skipping unreadable profile file %s: %s", path.name, e)
                continue
            if path.name != entry_filename(profile.id) or record.profile_id != profile.id:
                logger.warning("Skipping misplaced profile file %s", path.name)
                continue
            entries.append((seq, profile, record))

        for seq, profile, record in sorted(entries, key=lambda e: (e[0], e[1].id)):
            self._seq[profile.id] = seq
            self._profiles[profile.id] = profile
            self._embeddings[profile.id] = record
        if entries:
            logger.info("Loaded %d profiles from %s", len(entries), self._root)

    def _entry_path(self, profile_id: str) -> Path:
        return self._root / entry_filename(profile_id)

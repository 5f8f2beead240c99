"""
Points de reprise persistants de la synchronisation.

Un petit fichier JSON indexe par type de synchronisation:
    {"anime": {"lastIndex": 41, "updatedAt": "2026-01-01T12:00:00+00:00"}}

Chaque ecriture relit le fichier pour conserver les autres types. Un fichier
absent ou corrompu est traite comme un etat vide.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional


@dataclass(frozen=True)
class SyncProgress:
    """Dernier index traite pour un type de synchronisation."""

    last_index: int
    updated_at: str


class SyncProgressStore:
    """
    Lecture/ecriture du fichier de progression.

    Example:
        store = SyncProgressStore(Path(".jikan-lite-progress.json"))
        store.save("anime", 41)
        store.load("anime").last_index  # 41
    """

    def __init__(self, path: Path) -> None:
        self._path = path

    @property
    def path(self) -> Path:
        return self._path

    def read_all(self) -> dict[str, Any]:
        """Contenu complet du fichier, ou {} si absent ou illisible."""
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError):
            return {}
        return data if isinstance(data, dict) else {}

    def load(self, kind: str) -> Optional[SyncProgress]:
        """Progression enregistree pour ce type, ou None."""
        entry = self.read_all().get(kind)
        if not isinstance(entry, dict):
            return None
        last_index = entry.get("lastIndex")
        if not isinstance(last_index, int) or isinstance(last_index, bool) or last_index < -1:
            return None
        return SyncProgress(last_index=last_index, updated_at=str(entry.get("updatedAt", "")))

    def save(self, kind: str, last_index: int) -> SyncProgress:
        """
        Enregistre le dernier index traite pour ce type.

        Raises:
            OSError: Ecriture impossible (l'appelant decide de l'ignorer)
        """
        progress = SyncProgress(
            last_index=last_index,
            updated_at=datetime.now(timezone.utc).isoformat(),
        )
        data = self.read_all()
        data[kind] = {"lastIndex": progress.last_index, "updatedAt": progress.updated_at}

        self._path.parent.mkdir(parents=True, exist_ok=True)
        # Ecriture dans un fichier temporaire puis remplacement atomique
        temp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        temp_path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        temp_path.replace(self._path)
        return progress

"""Persisted dashboard state: search history and the last saved geolocation."""

from __future__ import annotations

import json
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .exceptions import StateStoreError


class HistoryEntry(BaseModel):
    """A past successful search, replayable without geocoding again."""

    model_config = ConfigDict(frozen=True)

    name: str
    lat: float
    lon: float


class SavedGeolocation(BaseModel):
    model_config = ConfigDict(frozen=True)

    lat: float
    lon: float


class AppState(BaseModel):
    """Everything the dashboard remembers between runs."""

    locations: list[HistoryEntry] = Field(default_factory=list)
    geolocation: SavedGeolocation | None = None


class HistoryStore:
    """JSON-file backed store for ``AppState``.

    The file holds two keys, ``locations`` and ``geolocation``. It is read once
    on construction and rewritten in full on every change.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._state = self._load()

    @property
    def state(self) -> AppState:
        return self._state.model_copy(deep=True)

    def locations(self) -> list[HistoryEntry]:
        return list(self._state.locations)

    def get_location(self, index: int) -> HistoryEntry:
        if index < 0 or index >= len(self._state.locations):
            raise LookupError(
                f"No history entry at index {index}; "
                f"history has {len(self._state.locations)} entries."
            )
        return self._state.locations[index]

    def record_search(self, entry: HistoryEntry) -> None:
        """Append ``entry`` and save its coordinates in a single write.

        Repeated searches are kept as separate entries.

        Either both keys change on disk or neither does.
        """
        state = self.state
        state.locations.append(entry)
        state.geolocation = SavedGeolocation(lat=entry.lat, lon=entry.lon)
        self._commit(state)

    def geolocation(self) -> SavedGeolocation | None:
        return self._state.geolocation

    def save_geolocation(self, lat: float, lon: float) -> None:
        state = self.state
        state.geolocation = SavedGeolocation(lat=lat, lon=lon)
        self._commit(state)

    def clear_geolocation(self) -> None:
        state = self.state
        state.geolocation = None
        self._commit(state)

    def reset(self) -> None:
        """Forget both the history and the saved geolocation."""
        self._commit(AppState())

    def _commit(self, state: AppState) -> None:
        # In-memory state only moves forward once the file holds it.
        self._write(state)
        self._state = state

    def _load(self) -> AppState:
        if not self.path.exists():
            return AppState()
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StateStoreError(f"Failed reading state file {self.path}: {exc}") from exc
        if not raw.strip():
            return AppState()
        try:
            return AppState.model_validate(json.loads(raw))
        except (ValueError, ValidationError) as exc:
            raise StateStoreError(f"State file {self.path} is not valid: {exc}") from exc

    def _write(self, state: AppState) -> None:
        tmp_path = self.path.with_name(f"{self.path.name}.tmp")
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with tmp_path.open("w", encoding="utf-8") as fh:
                json.dump(state.model_dump(mode="json"), fh, ensure_ascii=False, indent=2)
                fh.write("\n")
            tmp_path.replace(self.path)
        except (OSError, TypeError, ValueError) as exc:
            raise StateStoreError(f"Failed writing state file {self.path}: {exc}") from exc

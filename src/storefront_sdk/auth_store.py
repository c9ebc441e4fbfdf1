from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_data_dir
from pydantic import ValidationError

from .models import SessionData


def data_dir(app_name: str, base_dir: Path | None = None) -> Path:
    base = base_dir if base_dir is not None else Path(user_data_dir(app_name, "Storefront"))
    base.mkdir(parents=True, exist_ok=True)
    return base


@dataclass
class AuthStore:
    app_name: str = "storefront"
    filename: str = "session.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        return data_dir(self.app_name, self.base_dir) / self.filename

    def save(self, session: SessionData) -> None:
        path = self._path()
        data = session.model_dump(mode="json")
        path.write_text(json.dumps(data, indent=2))
        try:
            path.chmod(0o600)
        except OSError:
            pass

    def load(self) -> SessionData | None:
        path = self._path()
        if not path.exists():
            return None
        try:
            data = json.loads(path.read_text())
        except json.JSONDecodeError:
            self.clear()
            return None
        try:
            return SessionData.model_validate(data)
        except ValidationError:
            self.clear()
            return None

    def clear(self) -> None:
        path = self._path()
        if path.exists():
            path.unlink()

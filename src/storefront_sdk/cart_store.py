"""Durable storage for the shopping cart between sessions.

The cart is a JSON list of ``{"id": <product id>, "quantity": <n>}`` objects
kept in the per-user data directory. Writes are fire-and-forget: a failing
disk never reaches the caller, the in-memory cart simply stays authoritative
for the rest of the session.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from pydantic import ValidationError

from .auth_store import data_dir
from .models import CartLine

logger = logging.getLogger(__name__)


@dataclass
class CartStore:
    app_name: str = "storefront"
    filename: str = "cart.json"
    base_dir: Path | None = None

    def _path(self) -> Path:
        return data_dir(self.app_name, self.base_dir) / self.filename

    def read(self) -> list[CartLine]:
        try:
            path = self._path()
            if not path.exists():
                return []
            raw = json.loads(path.read_text(encoding="utf-8"))
        except ValueError:
            # undecodable bytes and malformed JSON both land here
            logger.warning("cart_store_corrupt", extra={"store_file": self.filename})
            self.clear()
            return []
        except OSError:
            logger.warning("cart_store_read_failed", extra={"store_file": self.filename})
            return []
        if not isinstance(raw, list):
            self.clear()
            return []
        lines: list[CartLine] = []
        for entry in raw:
            try:
                lines.append(CartLine.model_validate(entry))
            except ValidationError:
                logger.warning("cart_store_line_skipped", extra={"entry": entry})
        return lines

    def write(self, lines: Iterable[CartLine]) -> bool:
        payload = [line.model_dump(mode="json") for line in lines]
        try:
            self._path().write_text(json.dumps(payload), encoding="utf-8")
        except OSError:
            logger.warning("cart_store_write_failed", extra={"store_file": self.filename, "lines": len(payload)})
            return False
        return True

    def clear(self) -> None:
        try:
            path = self._path()
            if path.exists():
                path.unlink()
        except OSError:
            logger.warning("cart_store_clear_failed", extra={"store_file": self.filename})

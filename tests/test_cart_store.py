from __future__ import annotations

import json
from pathlib import Path

import pytest

from storefront_sdk.cart_store import CartStore
from storefront_sdk.models import CartLine


def test_read_missing_file_is_empty(tmp_path: Path) -> None:
    assert CartStore(base_dir=tmp_path).read() == []


def test_write_then_read(tmp_path: Path) -> None:
    store = CartStore(base_dir=tmp_path)
    assert store.write([CartLine(id=3, quantity=2), CartLine(id=5, quantity=1)])

    assert json.loads((tmp_path / "cart.json").read_text()) == [
        {"id": 3, "quantity": 2},
        {"id": 5, "quantity": 1},
    ]
    assert store.read() == [CartLine(id=3, quantity=2), CartLine(id=5, quantity=1)]


def test_corrupt_file_reads_empty_and_is_cleared(tmp_path: Path) -> None:
    (tmp_path / "cart.json").write_text("{not json", encoding="utf-8")
    store = CartStore(base_dir=tmp_path)

    assert store.read() == []
    assert not (tmp_path / "cart.json").exists()


def test_undecodable_bytes_read_empty_and_are_cleared(tmp_path: Path) -> None:
    (tmp_path / "cart.json").write_bytes(b"\xff\xfe\x00garbage")
    store = CartStore(base_dir=tmp_path)

    assert store.read() == []
    assert not (tmp_path / "cart.json").exists()


def test_non_list_content_reads_empty(tmp_path: Path) -> None:
    (tmp_path / "cart.json").write_text(json.dumps({"id": 1}), encoding="utf-8")

    assert CartStore(base_dir=tmp_path).read() == []


def test_invalid_lines_are_skipped(tmp_path: Path) -> None:
    (tmp_path / "cart.json").write_text(
        json.dumps([{"id": 1, "quantity": 2}, {"id": 2, "quantity": 0}, {"quantity": 1}, "x"]),
        encoding="utf-8",
    )

    assert CartStore(base_dir=tmp_path).read() == [CartLine(id=1, quantity=2)]


def test_write_failure_is_swallowed(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    store = CartStore(base_dir=tmp_path)

    def _fail(*args, **kwargs):
        raise OSError("disk full")

    monkeypatch.setattr(Path, "write_text", _fail)

    assert store.write([CartLine(id=1, quantity=1)]) is False


def test_clear_removes_file(tmp_path: Path) -> None:
    store = CartStore(base_dir=tmp_path)
    store.write([CartLine(id=1, quantity=1)])

    store.clear()

    assert store.read() == []
    assert not (tmp_path / "cart.json").exists()

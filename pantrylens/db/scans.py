"""Scan history storage: scans and their ingredient lists."""

from __future__ import annotations

import sqlite3
from pathlib import Path

from ..types import Ingredient, ScanResult
from .schema import ensure_schema

DEFAULT_DB_PATH = "~/.config/pantrylens/history.db"


class ScanHistoryDB:
    """Manages the scan_history and ingredients tables.

    Scan ids are opaque row ids; ingredients keep the order they were
    saved in.
    """

    def __init__(self, db_path: str | Path = DEFAULT_DB_PATH) -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _insert_ingredients(
        self, conn: sqlite3.Connection, scan_id: int, ingredients: list[Ingredient]
    ) -> None:
        conn.executemany(
            """INSERT INTO ingredients
               (scan_id, name, quantity, unit, confidence, position)
               VALUES (?, ?, ?, ?, ?, ?)""",
            [
                (scan_id, i.name, i.quantity, i.unit, i.confidence, pos)
                for pos, i in enumerate(ingredients)
            ],
        )

    def save_scan(self, scan: ScanResult) -> int:
        """Insert a scan and its ingredients.

        Returns:
            The new scan id.
        """
        conn = self._get_conn()
        with conn:
            cur = conn.execute(
                """INSERT INTO scan_history
                   (timestamp, raw_text, image_path, processed_image_path)
                   VALUES (?, ?, ?, ?)""",
                (
                    scan.timestamp,
                    scan.raw_text,
                    scan.image_path,
                    scan.processed_image_path,
                ),
            )
            scan_id = cur.lastrowid
            self._insert_ingredients(conn, scan_id, scan.ingredients)
        return scan_id

    def get_ingredients(self, scan_id: int) -> list[Ingredient]:
        """Return a scan's ingredients in saved order."""
        conn = self._get_conn()
        rows = conn.execute(
            """SELECT name, quantity, unit, confidence FROM ingredients
               WHERE scan_id = ? ORDER BY position""",
            (scan_id,),
        ).fetchall()
        return [
            Ingredient(
                name=r["name"],
                quantity=r["quantity"],
                unit=r["unit"],
                confidence=r["confidence"],
            )
            for r in rows
        ]

    def _to_scan(self, row: sqlite3.Row) -> ScanResult:
        return ScanResult(
            id=row["id"],
            timestamp=row["timestamp"],
            raw_text=row["raw_text"],
            ingredients=self.get_ingredients(row["id"]),
            image_path=row["image_path"],
            processed_image_path=row["processed_image_path"],
        )

    def get_scan(self, scan_id: int) -> ScanResult | None:
        """Return a scan with its ingredients, or None if it doesn't exist."""
        conn = self._get_conn()
        row = conn.execute(
            "SELECT * FROM scan_history WHERE id = ?", (scan_id,)
        ).fetchone()
        return self._to_scan(row) if row is not None else None

    def get_recent(self, limit: int = 10) -> list[ScanResult]:
        """Return the most recent scans, newest first."""
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT * FROM scan_history ORDER BY timestamp DESC, id DESC LIMIT ?",
            (limit,),
        ).fetchall()
        return [self._to_scan(r) for r in rows]

    def get_all(self) -> list[ScanResult]:
        """Return every scan, newest first."""
        conn = self._get_conn()
        rows = conn.execute(
            "SELECT * FROM scan_history ORDER BY timestamp DESC, id DESC"
        ).fetchall()
        return [self._to_scan(r) for r in rows]

    def update_ingredients(self, scan_id: int, ingredients: list[Ingredient]) -> None:
        """Replace a scan's ingredient list (e.g. after manual edits)."""
        conn = self._get_conn()
        with conn:
            conn.execute("DELETE FROM ingredients WHERE scan_id = ?", (scan_id,))
            self._insert_ingredients(conn, scan_id, ingredients)

    def delete_scan(self, scan_id: int) -> None:
        """Delete a scan and its ingredients."""
        conn = self._get_conn()
        with conn:
            conn.execute("DELETE FROM ingredients WHERE scan_id = ?", (scan_id,))
            conn.execute("DELETE FROM scan_history WHERE id = ?", (scan_id,))

    def delete_all(self) -> None:
        conn = self._get_conn()
        with conn:
            conn.execute("DELETE FROM ingredients")
            conn.execute("DELETE FROM scan_history")

    def count(self) -> int:
        conn = self._get_conn()
        row = conn.execute("SELECT COUNT(*) AS n FROM scan_history").fetchone()
        return row["n"]

from __future__ import annotations

import hashlib
import json
import logging
import sqlite3
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from resume_tailor.schemas.migration import upgrade_profile
from resume_tailor.schemas.profile import Profile

logger = logging.getLogger(__name__)


def _utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def merge_documents(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Merge `update` into `base`: nested objects merge, everything else (lists included) is replaced."""
    merged = dict(base)
    for key, value in update.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = merge_documents(current, value)
        else:
            merged[key] = value
    return merged


class ProfileStore:
    """One JSON profile document per user id, last write wins.

    Every save is mirrored into a per-user JSON file that reads fall back to
    when the database cannot be read.
    """

    def __init__(self, db_path: str, cache_dir: str):
        self._db_path = db_path
        self._cache_dir = Path(cache_dir)
        self._conn: sqlite3.Connection | None = None
        self._lock = threading.Lock()

    def _get_connection(self) -> sqlite3.Connection:
        with self._lock:
            if self._conn is not None:
                return self._conn

            if self._db_path != ":memory:":
                Path(self._db_path).parent.mkdir(parents=True, exist_ok=True)

            conn = sqlite3.connect(
                self._db_path,
                check_same_thread=False,
                timeout=5,
                isolation_level=None,
            )
            conn.execute("PRAGMA journal_mode=WAL;")
            conn.execute("PRAGMA busy_timeout=5000;")
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS profiles (
                    user_id TEXT PRIMARY KEY,
                    document_json TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                );
                """
            )
            self._conn = conn
            return conn

    def init(self) -> None:
        self._get_connection()
        self._cache_dir.mkdir(parents=True, exist_ok=True)

    def close(self) -> None:
        with self._lock:
            if self._conn is not None:
                self._conn.close()
                self._conn = None

    def ping(self) -> bool:
        try:
            conn = self._get_connection()
            with self._lock:
                conn.execute("SELECT 1").fetchone()
        except sqlite3.Error as exc:
            logger.warning("profile_store_unavailable: %s", exc)
            return False
        return True

    def _cache_path(self, user_id: str) -> Path:
        digest = hashlib.sha256(user_id.encode("utf-8")).hexdigest()
        return self._cache_dir / f"profile_{digest}.json"

    def _read_document(self, user_id: str) -> dict[str, Any] | None:
        conn = self._get_connection()
        with self._lock:
            row = conn.execute(
                "SELECT document_json FROM profiles WHERE user_id = ?",
                (user_id,),
            ).fetchone()
        if not row:
            return None
        return json.loads(row[0])

    def get_profile(self, user_id: str) -> Profile | None:
        try:
            document = self._read_document(user_id)
        except sqlite3.Error as exc:
            logger.warning("profile_read_failed user_id=%s, using cache: %s", user_id, exc)
            return self.get_cached_profile(user_id)
        if document is None:
            return None
        return upgrade_profile(document)

    def get_cached_profile(self, user_id: str) -> Profile | None:
        path = self._cache_path(user_id)
        if not path.exists():
            return None
        return upgrade_profile(json.loads(path.read_text(encoding="utf-8")))

    def save_profile(self, user_id: str, profile: Profile) -> Profile:
        conn = self._get_connection()
        document = profile.to_document()
        updated_at = _utc_now()

        with self._lock:
            cursor = conn.cursor()
            cursor.execute("BEGIN IMMEDIATE")
            try:
                row = cursor.execute(
                    "SELECT document_json FROM profiles WHERE user_id = ?",
                    (user_id,),
                ).fetchone()
                existing = json.loads(row[0]) if row else {}
                merged = merge_documents(existing, document)
                merged["updatedAt"] = updated_at
                cursor.execute(
                    """
                    INSERT INTO profiles (user_id, document_json, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(user_id) DO UPDATE SET
                        document_json = excluded.document_json,
                        updated_at = excluded.updated_at
                    """,
                    (user_id, json.dumps(merged, ensure_ascii=False), updated_at),
                )
                conn.commit()
            except Exception:
                conn.rollback()
                raise

        self._write_cache(user_id, document)
        logger.info("profile_saved user_id=%s updated_at=%s", user_id, updated_at)
        return upgrade_profile(merged)

    def _write_cache(self, user_id: str, document: dict[str, Any]) -> None:
        self._cache_dir.mkdir(parents=True, exist_ok=True)
        self._cache_path(user_id).write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")

    def delete_profile(self, user_id: str) -> bool:
        conn = self._get_connection()
        with self._lock:
            cur = conn.execute("DELETE FROM profiles WHERE user_id = ?", (user_id,))
            conn.commit()
        self._cache_path(user_id).unlink(missing_ok=True)
        deleted = cur.rowcount > 0
        logger.info("profile_deleted user_id=%s deleted=%s", user_id, deleted)
        return deleted

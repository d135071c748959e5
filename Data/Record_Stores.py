# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Data/Record_Stores.py
#  Purpose: Keyed record storage backends (in-memory and SQLite).
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

import json
import sqlite3
from typing import Any, Dict, List, Optional, Protocol, Tuple

from Core.Errors import PersistenceError


TABLE_NAME = "game_activities"


class Record_Store(Protocol):
    def Put(self, record_dict: Dict[str, Any]) -> None:
        ...

    def Get(self, key_str: str, type_str: str) -> Optional[Dict[str, Any]]:
        ...


def _Encode(record_dict: Dict[str, Any]) -> Tuple[str, str, str]:
    try:
        key_str = str(record_dict["key"])
        type_str = str(record_dict["type"])
        payload_str = json.dumps(record_dict)
    except (KeyError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Record cannot be serialized: {exc}") from exc
    return key_str, type_str, payload_str


class In_Memory_Record_Store:

    def __init__(self) -> None:
        self._records_dict: Dict[Tuple[str, str], str] = {}

    def Put(self, record_dict: Dict[str, Any]) -> None:
        key_str, type_str, payload_str = _Encode(record_dict)
        self._records_dict[(key_str, type_str)] = payload_str

    def Get(self, key_str: str, type_str: str) -> Optional[Dict[str, Any]]:
        payload_str_opt = self._records_dict.get((str(key_str), str(type_str)))
        if payload_str_opt is None:
            return None
        return json.loads(payload_str_opt)

    def Query_Run(self, run_id_str: str) -> List[Dict[str, Any]]:
        records_list = [json.loads(payload) for payload in self._records_dict.values()]
        return [r for r in records_list if r.get("run_id") == run_id_str or r.get("key") == run_id_str]

    def __len__(self) -> int:
        return len(self._records_dict)


class Sqlite_Record_Store:

    def __init__(self, db_path_str: str = ":memory:") -> None:
        self.db_path_str = db_path_str
        try:
            self.conn = sqlite3.connect(db_path_str)
            cur = self.conn.cursor()
            cur.execute(
                f"""
                CREATE TABLE IF NOT EXISTS {TABLE_NAME} (
                    key TEXT NOT NULL,
                    type TEXT NOT NULL,
                    run_id TEXT,
                    payload TEXT NOT NULL,
                    created_at DATETIME DEFAULT CURRENT_TIMESTAMP,
                    PRIMARY KEY (key, type)
                )
                """
            )
            self.conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Cannot open record store at {db_path_str}: {exc}") from exc

    def Put(self, record_dict: Dict[str, Any]) -> None:
        key_str, type_str, payload_str = _Encode(record_dict)
        try:
            self.conn.execute(
                f"INSERT OR REPLACE INTO {TABLE_NAME} (key, type, run_id, payload) VALUES (?, ?, ?, ?)",
                (key_str, type_str, record_dict.get("run_id"), payload_str),
            )
            self.conn.commit()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Put failed for {key_str}/{type_str}: {exc}") from exc

    def Get(self, key_str: str, type_str: str) -> Optional[Dict[str, Any]]:
        try:
            row = self.conn.execute(
                f"SELECT payload FROM {TABLE_NAME} WHERE key = ? AND type = ?",
                (str(key_str), str(type_str)),
            ).fetchone()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Get failed for {key_str}/{type_str}: {exc}") from exc

        if row is None:
            return None
        return json.loads(row[0])

    def Query_Run(self, run_id_str: str) -> List[Dict[str, Any]]:
        try:
            rows = self.conn.execute(
                f"SELECT payload FROM {TABLE_NAME} WHERE run_id = ? OR key = ? ORDER BY created_at",
                (run_id_str, run_id_str),
            ).fetchall()
        except sqlite3.Error as exc:
            raise PersistenceError(f"Query failed for run {run_id_str}: {exc}") from exc
        return [json.loads(row[0]) for row in rows]

    def Close(self) -> None:
        self.conn.close()

    def __enter__(self) -> "Sqlite_Record_Store":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.Close()

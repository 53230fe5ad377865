"""
SQLite 持久化：AI 配置记录表 (ai) 与键值设置表 (config)。

每次操作单独打开连接；db_path 为 ':memory:' 时复用同一个连接，
否则内存库在连接关闭后就消失了。
"""

import sqlite3
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional

from .utils import setup_logger

logger = setup_logger(__name__)


class _SQLiteBase:
    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or ":memory:"
        self._shared: Optional[sqlite3.Connection] = None
        if self.db_path == ":memory:":
            self._shared = sqlite3.connect(self.db_path, check_same_thread=False)
        self._initialize_db()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = self._shared or sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            if conn is not self._shared:
                conn.close()

    def _initialize_db(self) -> None:
        raise NotImplementedError


class AiRecordStore(_SQLiteBase):
    """ai 表：id, introduce, prompt, created_at, updated_at"""

    def _initialize_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS ai (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    introduce TEXT,
                    prompt TEXT,
                    created_at TEXT,
                    updated_at TEXT
                )
            """)
        logger.debug(f"AI 配置表初始化完成: {self.db_path}")

    def insert(self, row: Dict) -> int:
        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO ai (introduce, prompt, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (row.get("introduce"), row.get("prompt"), row.get("created_at"), row.get("updated_at")),
            )
            return cursor.lastrowid

    def select_list(self) -> List[Dict]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM ai ORDER BY id").fetchall()
        return [dict(r) for r in rows]

    def select_latest(self) -> Optional[Dict]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM ai ORDER BY id DESC LIMIT 1").fetchone()
        return dict(row) if row else None

    def select_by_id(self, record_id: int) -> Optional[Dict]:
        with self._connect() as conn:
            row = conn.execute("SELECT * FROM ai WHERE id = ?", (record_id,)).fetchone()
        return dict(row) if row else None

    def update_by_id(self, row: Dict) -> int:
        with self._connect() as conn:
            cursor = conn.execute(
                "UPDATE ai SET introduce = ?, prompt = ?, updated_at = ? WHERE id = ?",
                (row.get("introduce"), row.get("prompt"), row.get("updated_at"), row["id"]),
            )
            return cursor.rowcount

    def delete_by_id(self, record_id: int) -> int:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM ai WHERE id = ?", (record_id,))
            return cursor.rowcount


class SettingsStore(_SQLiteBase):
    """config 表：可在运行时修改的键值配置，LLMClient 每次调用都会重新读取"""

    def _initialize_db(self) -> None:
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS config (
                    config_key TEXT PRIMARY KEY,
                    config_value TEXT
                )
            """)

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT config_value FROM config WHERE config_key = ?", (key,)
            ).fetchone()
        return row["config_value"] if row else None

    def set(self, key: str, value: Optional[str]) -> None:
        with self._connect() as conn:
            conn.execute(
                "INSERT INTO config (config_key, config_value) VALUES (?, ?) "
                "ON CONFLICT(config_key) DO UPDATE SET config_value = excluded.config_value",
                (key, value),
            )
        logger.info(f"配置已更新: {key}")

    def all(self) -> Dict[str, Optional[str]]:
        with self._connect() as conn:
            rows = conn.execute("SELECT config_key, config_value FROM config ORDER BY config_key").fetchall()
        return {r["config_key"]: r["config_value"] for r in rows}

    def seed(self, defaults: Dict[str, Optional[str]]) -> List[str]:
        """只写入尚不存在的键，返回写入的键"""
        seeded = []
        with self._connect() as conn:
            for key, value in defaults.items():
                if value is None:
                    continue
                cursor = conn.execute(
                    "INSERT OR IGNORE INTO config (config_key, config_value) VALUES (?, ?)",
                    (key, value),
                )
                if cursor.rowcount:
                    seeded.append(key)
        return seeded

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable

from werkzeug.security import generate_password_hash

from .connection import DatabaseConnection, DBConfig

logger = logging.getLogger(__name__)

DEMO_STATION = "Head Office"


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _iter_sql_statements(sql: str) -> Iterable[str]:
    # Statements in schema/seed files end with ';' at the end of a line.
    for chunk in re.split(r";\s*$", sql, flags=re.MULTILINE):
        lines = [line for line in chunk.splitlines() if not line.strip().startswith("--")]
        stmt = "\n".join(lines).strip()
        if stmt:
            yield stmt


def _run_sql_file(db_config: dict, path: str | Path) -> None:
    sql = _strip_create_db_and_use(Path(path).read_text(encoding="utf-8"))
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        for stmt in _iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


def ensure_database_exists(db_config: dict) -> None:
    config = DBConfig.from_dict(db_config)
    conn = DatabaseConnection(config).connect(with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{config.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    _run_sql_file(db_config, schema_path)
    logger.info("Schema applied from %s", schema_path)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    _run_sql_file(db_config, seed_path)
    logger.info("Seed applied from %s", seed_path)


def ensure_demo_users(db_config: dict) -> None:
    """Upsert a demo admin and a demo field employee assigned to the demo station."""

    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor(dictionary=True)
        cur.execute("SELECT station_id FROM work_stations WHERE name=%s", (DEMO_STATION,))
        row = cur.fetchone()
        if not row:
            raise RuntimeError(f"Missing work_stations row for name={DEMO_STATION}")
        station_id = int(row["station_id"])

        def upsert(code: str, name: str, password: str, role: str, work_station_id) -> None:
            password_hash = generate_password_hash(password)
            cur.execute("SELECT employee_id FROM employees WHERE employee_code=%s", (code,))
            if cur.fetchone():
                cur.execute(
                    """
                    UPDATE employees
                    SET name=%s, password_hash=%s, role=%s, work_station_id=%s
                    WHERE employee_code=%s
                    """,
                    (name, password_hash, role, work_station_id, code),
                )
            else:
                cur.execute(
                    """
                    INSERT INTO employees (employee_code, name, role, work_station_id, password_hash)
                    VALUES (%s, %s, %s, %s, %s)
                    """,
                    (code, name, role, work_station_id, password_hash),
                )

        upsert("ADM001", "Admin Demo", "admin123", "admin", None)
        upsert("EMP001", "Field Employee Demo", "employee123", "employee", station_id)
        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = DatabaseConnection(DBConfig.from_dict(db_config)).connect()
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()

"""
SQLite-backed appointment store.
"""

import asyncio
import sqlite3
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence

from ...config import DatabaseConfig
from ...core.enums import AppointmentStatus
from ...core.exceptions import SlotConflictStoreError, StoreError
from ...core.models import Appointment
from ...utils.date import DateParser, format_timestamp
from ...utils.logging import get_logger
from .base import AppointmentStore

logger = get_logger("clinic.store")

_COLUMNS = (
    "id", "clinic_id", "user_id", "date", "time", "value",
    "status", "notes", "created_at", "updated_at",
)

_SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS appointments (
        id TEXT PRIMARY KEY,
        clinic_id TEXT NOT NULL,
        user_id TEXT NOT NULL,
        date TEXT NOT NULL,
        time TEXT NOT NULL,
        value TEXT NOT NULL,
        status TEXT NOT NULL,
        notes TEXT,
        created_at TEXT NOT NULL,
        updated_at TEXT NOT NULL
    )
    """,
    # at most one non-cancelled appointment per slot
    """
    CREATE UNIQUE INDEX IF NOT EXISTS ux_appointments_active_slot
    ON appointments (clinic_id, date, time)
    WHERE status != 'cancelled'
    """,
    """
    CREATE INDEX IF NOT EXISTS ix_appointments_clinic_date
    ON appointments (clinic_id, date)
    """,
)


def _to_row(appointment: Appointment) -> tuple:
    return (
        appointment.id,
        appointment.clinic_id,
        appointment.user_id,
        DateParser.format(appointment.date),
        # seconds always stored so "09:00" and "09:00:00" hit the same index key
        appointment.time.strftime("%H:%M:%S"),
        str(appointment.value),
        appointment.status.value,
        appointment.notes,
        format_timestamp(appointment.created_at),
        format_timestamp(appointment.updated_at),
    )


def _from_row(row: sqlite3.Row) -> Appointment:
    record: Dict[str, Any] = {name: row[name] for name in _COLUMNS}
    return Appointment.from_record(record)


class SQLiteAppointmentStore(AppointmentStore):
    """Appointment store on a local SQLite file, one connection per call."""

    def __init__(self, config: DatabaseConfig):
        self.config = config
        self.db_path = config.appointments_db_path
        self._ready = False
        self._init_lock = asyncio.Lock()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self.db_path,
            timeout=self.config.connection_timeout,
            isolation_level=None,
        )
        conn.row_factory = sqlite3.Row
        return conn

    async def _ensure_table(self) -> None:
        """Ensure the appointments table and its indexes exist."""
        if self._ready:
            return

        def _create_table():
            conn = self._connect()
            try:
                for statement in _SCHEMA:
                    conn.execute(statement)
            finally:
                conn.close()

        async with self._init_lock:
            if self._ready:
                return
            try:
                await asyncio.to_thread(_create_table)
            except sqlite3.Error as e:
                raise StoreError(f"Could not initialise appointment store: {e}") from e
            self._ready = True

    async def _run(self, fn):
        await self._ensure_table()
        try:
            return await asyncio.to_thread(fn)
        except StoreError:
            raise
        except sqlite3.Error as e:
            logger.error("store operation failed: %s", e)
            raise StoreError(f"Appointment store failure: {e}") from e

    async def ping(self) -> None:
        def _select() -> None:
            conn = self._connect()
            try:
                conn.execute("SELECT 1 FROM appointments LIMIT 1").fetchall()
            finally:
                conn.close()

        await self._run(_select)

    async def insert_many(self, appointments: Sequence[Appointment]) -> List[Appointment]:
        rows = [_to_row(a) for a in appointments]
        if not rows:
            return []

        placeholders = ", ".join("?" for _ in _COLUMNS)
        sql = f"INSERT INTO appointments ({', '.join(_COLUMNS)}) VALUES ({placeholders})"

        def _write() -> None:
            conn = self._connect()
            try:
                conn.execute("BEGIN IMMEDIATE")
                try:
                    for appointment, row in zip(appointments, rows):
                        try:
                            conn.execute(sql, row)
                        except sqlite3.IntegrityError as e:
                            if "appointments.id" in str(e):
                                raise StoreError(
                                    f"Duplicate appointment id {appointment.id}"
                                ) from e
                            raise SlotConflictStoreError(
                                f"Slot {row[3]} {row[4]} of clinic {row[1]} is already booked",
                                slot=(appointment.clinic_id, row[3], row[4]),
                            ) from e
                except BaseException:
                    conn.execute("ROLLBACK")
                    raise
                conn.execute("COMMIT")
            finally:
                conn.close()

        await self._run(_write)
        return list(appointments)

    async def update_status(
        self,
        appointment_id: str,
        expected: AppointmentStatus,
        new_status: AppointmentStatus,
        updated_at: datetime,
    ) -> Optional[Appointment]:
        def _update() -> Optional[Appointment]:
            conn = self._connect()
            try:
                conn.execute("BEGIN IMMEDIATE")
                try:
                    cur = conn.execute(
                        "UPDATE appointments SET status = ?, updated_at = ? "
                        "WHERE id = ? AND status = ?",
                        (
                            new_status.value,
                            format_timestamp(updated_at),
                            appointment_id,
                            expected.value,
                        ),
                    )
                    if cur.rowcount == 0:
                        conn.execute("ROLLBACK")
                        return None
                    row = conn.execute(
                        "SELECT * FROM appointments WHERE id = ?", (appointment_id,)
                    ).fetchone()
                except BaseException:
                    conn.execute("ROLLBACK")
                    raise
                conn.execute("COMMIT")
            finally:
                conn.close()
            return _from_row(row)

        return await self._run(_update)

    async def get(self, appointment_id: str) -> Optional[Appointment]:
        def _fetch() -> Optional[Appointment]:
            conn = self._connect()
            try:
                row = conn.execute(
                    "SELECT * FROM appointments WHERE id = ?", (appointment_id,)
                ).fetchone()
            finally:
                conn.close()
            return _from_row(row) if row else None

        return await self._run(_fetch)

    async def query(
        self,
        clinic_ids: Iterable[str],
        status: Optional[AppointmentStatus] = None,
        day: Optional[date] = None,
        statuses: Optional[Iterable[AppointmentStatus]] = None,
    ) -> List[Appointment]:
        ids = list(dict.fromkeys(clinic_ids))
        if not ids:
            return []

        clauses = [f"clinic_id IN ({', '.join('?' for _ in ids)})"]
        params: List[Any] = list(ids)

        if status is not None:
            clauses.append("status = ?")
            params.append(status.value)
        if statuses is not None:
            wanted = [s.value for s in statuses]
            if not wanted:
                return []
            clauses.append(f"status IN ({', '.join('?' for _ in wanted)})")
            params.extend(wanted)
        if day is not None:
            clauses.append("date = ?")
            params.append(DateParser.format(day))

        sql = (
            "SELECT * FROM appointments WHERE "
            + " AND ".join(clauses)
            + " ORDER BY date ASC, time ASC"
        )

        def _fetch() -> List[Appointment]:
            conn = self._connect()
            try:
                rows = conn.execute(sql, params).fetchall()
            finally:
                conn.close()
            return [_from_row(r) for r in rows]

        return await self._run(_fetch)

"""Repository for async CRUD operations on stored scans."""

from __future__ import annotations

import uuid

import aiosqlite

from surfacemap.scanner.models import ScanResult


class ScanRepo:
    """CRUD for scan results and findings."""

    def __init__(self, db: aiosqlite.Connection) -> None:
        self._db = db

    async def save_result(self, result: ScanResult) -> str:
        scan_id = uuid.uuid4().hex[:12]
        await self._db.execute(
            "INSERT INTO scan_results "
            "(id, directory, files_scanned, files_skipped, files_failed, "
            "cancelled, duration, timestamp) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?)",
            (
                scan_id,
                result.directory,
                result.files_scanned,
                result.files_skipped,
                result.files_failed,
                int(result.cancelled),
                result.duration,
                result.timestamp,
            ),
        )

        await self._db.executemany(
            "INSERT INTO scan_findings "
            "(scan_id, seq, rule_id, severity, confidence, message, "
            "file_path, start_line, end_line, endpoint) "
            "VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)",
            [
                (
                    scan_id,
                    seq,
                    finding.rule_id,
                    finding.severity.value,
                    finding.confidence.value,
                    finding.message,
                    finding.file_path,
                    finding.start_line,
                    finding.end_line,
                    finding.endpoint,
                )
                for seq, finding in enumerate(result.findings)
            ],
        )

        await self._db.commit()
        return scan_id

    async def get(self, scan_id: str) -> dict | None:
        cursor = await self._db.execute(
            "SELECT * FROM scan_results WHERE id = ?", (scan_id,)
        )
        row = await cursor.fetchone()
        if not row:
            return None

        result = dict(row)
        result["cancelled"] = bool(result["cancelled"])
        cursor = await self._db.execute(
            "SELECT rule_id, severity, confidence, message, file_path, "
            "start_line, end_line, endpoint "
            "FROM scan_findings WHERE scan_id = ? ORDER BY seq",
            (scan_id,),
        )
        result["findings"] = [dict(r) async for r in cursor]
        return result

    async def list_all(self, limit: int = 50, offset: int = 0) -> list[dict]:
        cursor = await self._db.execute(
            "SELECT s.*, "
            "(SELECT COUNT(*) FROM scan_findings f WHERE f.scan_id = s.id) "
            "AS finding_count "
            "FROM scan_results s ORDER BY timestamp DESC LIMIT ? OFFSET ?",
            (limit, offset),
        )
        rows = [dict(row) async for row in cursor]
        for row in rows:
            row["cancelled"] = bool(row["cancelled"])
        return rows

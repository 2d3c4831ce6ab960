"""Demo data seeder — loads YAML fixtures into empty collections at startup."""

import logging
from pathlib import Path
from typing import Any

import yaml

from wms.application.interfaces import RecordService
from wms.domain.entities import PROFILES

logger = logging.getLogger(__name__)

# Entry keys stored on the record itself rather than in its data.
_RECORD_KEYS = ("id", "created_by", "archived")


class DemoSeeder:
    """Seeds each known collection from one YAML file.

    Collections that already hold records are left alone, so running the
    seeder on every startup is safe.
    """

    def __init__(self, seed_file: str | Path, service: RecordService):
        self._seed_file = Path(seed_file)
        self._service = service

    def _read(self) -> dict[str, list[dict[str, Any]]]:
        with self._seed_file.open("r", encoding="utf-8") as fh:
            data = yaml.safe_load(fh) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{self._seed_file} must map collection names to lists")
        return data

    async def seed(self) -> int:
        """Return the number of records created."""
        if not self._seed_file.exists():
            logger.warning("Demo data file %s not found — skipping seed", self._seed_file)
            return 0

        total = 0
        for entity_type, entries in self._read().items():
            if entity_type not in PROFILES:
                logger.warning("Skipping unknown collection '%s' in demo data", entity_type)
                continue
            if await self._service.list_records(entity_type):
                logger.debug("Collection '%s' already populated", entity_type)
                continue
            for entry in entries or []:
                total += await self._seed_entry(entity_type, dict(entry))
            logger.info("Seeded %d %s", len(entries or []), entity_type)
        return total

    async def _seed_entry(self, entity_type: str, entry: dict[str, Any]) -> int:
        record_id, created_by, archived = (entry.pop(key, None) for key in _RECORD_KEYS)
        record = await self._service.create(
            entity_type, entry, record_id=record_id, created_by=created_by
        )
        if archived:
            await self._service.archive(entity_type, record.id)
        return 1

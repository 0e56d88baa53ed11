"""Supabase-backed key-value settings store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from personal_trainer.services.store import SettingsStore


@dataclass
class SupabaseSettingsStore(SettingsStore):
    """Stores each key as one row of a key/value table."""

    client: Client
    table: str = "app_settings"

    def get(self, key: str) -> str | None:
        """Return the stored blob for a key."""
        response = (
            self.client.table(self.table)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, str) else None

    def set(self, key: str, value: str) -> None:
        """Insert or replace the blob for a key."""
        self.client.table(self.table).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()

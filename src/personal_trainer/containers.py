"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from personal_trainer.adapters.json_file_settings_store import JsonFileSettingsStore
from personal_trainer.adapters.supabase_settings_store import SupabaseSettingsStore
from personal_trainer.config import Settings
from personal_trainer.services.store import SettingsStore, TrainerStore


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: TrainerStore


def build_settings_store(settings: Settings) -> SettingsStore:
    """Create the key-value store selected by configuration."""
    if settings.storage_backend == "supabase":
        if not settings.supabase_url or not settings.supabase_service_key:
            raise ValueError(
                "SUPABASE_URL and SUPABASE_SERVICE_KEY are required for the "
                "supabase storage backend"
            )
        client = create_client(settings.supabase_url, settings.supabase_service_key)
        return SupabaseSettingsStore(client, table=settings.supabase_settings_table)
    return JsonFileSettingsStore(settings.data_path)


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    store = TrainerStore(
        build_settings_store(resolved_settings),
        allow_negative_balance=resolved_settings.allow_negative_balance,
    )
    return AppContainer(settings=resolved_settings, store=store)

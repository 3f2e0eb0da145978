"""Settings store for user-editable configuration."""

import json
import re
from typing import Any, Iterable, Mapping

from ..domain.models import ProjectConfig, current_timestamp
from ..domain.protocols import OptionStore


EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

SECRET_KEYS = ("bugherd_api_key", "openai_api_key")


class DragonHerdSettings:
    """Typed access to the settings blob kept in an option store.

    Every read merges the stored values over DEFAULT_SETTINGS; nothing is
    cached between calls.
    """

    OPTION_NAME = "dragonherd_settings"

    DEFAULT_SETTINGS: dict[str, Any] = {
        "bugherd_api_key": "",
        "openai_api_key": "",
        "default_project_id": "",
        "projects": {},
        "sync_schedule": "daily",
        "enable_notifications": True,
        "notification_email": "",
        "custom_ai_prompt": "",
        "max_tasks_per_sync": 100,
        "cache_duration": 3600,  # 1 hour in seconds
        "debug_mode": False,
    }

    SYNC_SCHEDULE_OPTIONS: dict[str, str] = {
        "disabled": "Disabled",
        "hourly": "Every Hour",
        "daily": "Daily",
        "weekly": "Weekly",
    }

    def __init__(self, store: OptionStore) -> None:
        self._store = store

    @property
    def store(self) -> OptionStore:
        return self._store

    def get_settings(self) -> dict[str, Any]:
        """Get all settings with defaults filled in."""
        stored = self._store.get(self.OPTION_NAME, {}) or {}
        return {**self.DEFAULT_SETTINGS, **stored}

    def get(self, key: str, default: Any = None) -> Any:
        """Get a specific setting value."""
        value = self.get_settings().get(key)
        return default if value is None else value

    def set(self, key: str, value: Any) -> bool:
        """Update a specific setting."""
        settings = self.get_settings()
        settings[key] = value
        return self._store.set(self.OPTION_NAME, settings)

    def update(self, new_settings: Mapping[str, Any]) -> bool:
        """Update multiple settings at once."""
        settings = self.get_settings()
        settings.update(new_settings)
        return self._store.set(self.OPTION_NAME, settings)

    def delete(self) -> bool:
        """Delete all settings."""
        return self._store.delete(self.OPTION_NAME)

    # Typed accessors

    def get_bugherd_api_key(self) -> str:
        return self.get("bugherd_api_key", "")

    def get_openai_api_key(self) -> str:
        return self.get("openai_api_key", "")

    def get_default_project_id(self) -> str:
        return str(self.get("default_project_id", ""))

    def get_projects(self) -> dict[str, ProjectConfig]:
        """Get all configured projects keyed by id."""
        raw = self.get("projects", {}) or {}
        return {
            str(project_id): ProjectConfig.from_dict({"id": project_id, **data})
            for project_id, data in raw.items()
        }

    def get_sync_schedule(self) -> str:
        return self.get("sync_schedule", "daily")

    def get_max_tasks_per_sync(self) -> int:
        return int(self.get("max_tasks_per_sync", 0))

    def get_cache_duration(self) -> int:
        return int(self.get("cache_duration", 0))

    def notifications_enabled(self) -> bool:
        return bool(self.get("enable_notifications", False))

    def get_notification_email(self) -> str:
        return self.get("notification_email", "")

    def is_debug_mode(self) -> bool:
        return bool(self.get("debug_mode", False))

    def get_sync_schedule_options(self) -> dict[str, str]:
        """Get available sync schedules and their labels."""
        return dict(self.SYNC_SCHEDULE_OPTIONS)

    # Projects

    def add_project(self, project: Mapping[str, Any]) -> bool:
        """Add or update a project.

        Args:
            project: Mapping with at least "id" and "name"

        Returns:
            False if id or name is missing, otherwise the store result
        """
        project_id = str(project.get("id") or "").strip()
        name = str(project.get("name") or "").strip()
        if not project_id or not name:
            return False

        projects = self.get("projects", {}) or {}
        now = current_timestamp()
        created_at = (projects.get(project_id) or {}).get("created_at", now)
        projects[project_id] = ProjectConfig(
            id=project_id,
            name=name,
            description=str(project.get("description") or "").strip(),
            active=bool(project.get("active", True)),
            created_at=created_at,
            updated_at=now,
        ).to_dict()
        return self.set("projects", projects)

    def remove_project(self, project_id: str) -> bool:
        """Remove a project."""
        projects = self.get("projects", {}) or {}
        if project_id not in projects:
            return False
        del projects[project_id]
        return self.set("projects", projects)

    # Backup

    def export(self) -> str:
        """Export settings as JSON with API keys blanked."""
        settings = self.get_settings()
        for key in SECRET_KEYS:
            settings[key] = ""
        return json.dumps(settings, indent=4)

    def import_settings(self, payload: str) -> bool:
        """Import settings from an export.

        Unknown keys and API keys are ignored.
        """
        try:
            imported = json.loads(payload)
        except json.JSONDecodeError:
            return False
        if not isinstance(imported, dict):
            return False

        settings = self.get_settings()
        for key, value in imported.items():
            if key in self.DEFAULT_SETTINGS and key not in SECRET_KEYS:
                settings[key] = value
        return self._store.set(self.OPTION_NAME, settings)

    def validate(
        self,
        settings: Mapping[str, Any],
        extra_schedules: Iterable[str] = (),
    ) -> dict[str, Any]:
        """Return the subset of settings that passes validation, normalized.

        Args:
            settings: Submitted values
            extra_schedules: Interval names accepted besides the built-in options
        """
        validated: dict[str, Any] = {}

        for key in (
            "bugherd_api_key",
            "openai_api_key",
            "default_project_id",
            "custom_ai_prompt",
        ):
            if key in settings:
                validated[key] = str(settings[key]).strip()

        allowed_schedules = set(self.SYNC_SCHEDULE_OPTIONS) | set(extra_schedules)
        if settings.get("sync_schedule") in allowed_schedules:
            validated["sync_schedule"] = settings["sync_schedule"]

        if "enable_notifications" in settings:
            validated["enable_notifications"] = bool(settings["enable_notifications"])

        if "notification_email" in settings:
            email = str(settings["notification_email"]).strip()
            if EMAIL_PATTERN.match(email):
                validated["notification_email"] = email

        for key in ("max_tasks_per_sync", "cache_duration"):
            if key in settings:
                try:
                    validated[key] = abs(int(settings[key]))
                except (TypeError, ValueError):
                    validated[key] = 0

        if "debug_mode" in settings:
            validated["debug_mode"] = bool(settings["debug_mode"])

        return validated

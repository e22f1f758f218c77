from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Any, Callable, List, Optional
from genebattle.core.logging import logger

SETTINGS_FILENAME = ".genebattle_settings.json"

DIFFICULTY_NAMES = ("easy", "normal", "hard", "extreme")
LOG_LEVELS = ("DEBUG", "INFO", "WARN", "ERROR")

@dataclass
class SettingsData:
    difficulty: str = "normal"          # easy / normal / hard / extreme
    log_level: str = "INFO"             # DEBUG / INFO / WARN / ERROR
    ai_think_time: float = 2.0          # seconds the AI "thinks" before acting
    turn_transition_time: float = 2.5   # seconds between resolved turns
    seed: Optional[int] = None          # fixed RNG seed for reproducible battles
    debug: bool = False                 # Verbose battle prints

    def normalize(self):
        if not isinstance(self.difficulty, str) or self.difficulty.lower() not in DIFFICULTY_NAMES:
            self.difficulty = "normal"
        self.difficulty = self.difficulty.lower()
        if self.log_level not in LOG_LEVELS:
            self.log_level = "INFO"
        for name, default in (("ai_think_time", 2.0), ("turn_transition_time", 2.5)):
            value = getattr(self, name)
            if not isinstance(value, (int, float)) or isinstance(value, bool) or value < 0:
                setattr(self, name, default)
        if self.seed is not None and not isinstance(self.seed, int):
            self.seed = None
        self.debug = bool(self.debug)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Backfill missing fields (migration safe)
                field_names = {f.name for f in fields(SettingsData)}
                data_kwargs = {name: raw[name] for name in field_names if name in raw}
                data = SettingsData(**data_kwargs)
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply_log_level(self):
        lvl: str = self.data.log_level
        if lvl in LOG_LEVELS:
            logger.set_level(lvl)  # type: ignore[arg-type]

    def update(self, **changes: Any):
        known = {f.name for f in fields(SettingsData)}
        for key, value in changes.items():
            if key not in known:
                logger.warn("UnknownSetting", key=key)
                continue
            setattr(self.data, key, value)
        self.data.normalize()
        self.apply_log_level()
        self.save()
        self._notify()

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)

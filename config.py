import json
import os
from dataclasses import dataclass
from typing import Optional

import firebase_admin
from firebase_admin import credentials

from storage import DEFAULT_SLOT_NAME, FernetCodec, FirebaseSlot, JsonCodec, LocalFileSlot, MemorySlot

BACKENDS = ("local", "firebase", "memory")


class ConfigError(ValueError):
    pass


@dataclass
class TrackerConfig:
    backend: str = "local"
    data_dir: str = ".pulse"
    slot_name: str = DEFAULT_SLOT_NAME
    firebase_root: str = "pulse"
    firebase_credentials: Optional[str] = None
    firebase_database_url: Optional[str] = None
    encryption_key: Optional[str] = None
    chart_width: int = 500
    chart_height: int = 300
    chart_margin: int = 40


def _int_env(env, name, default):
    value = env.get(name)
    if value in (None, ""):
        return default
    try:
        return int(value)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {value!r}")


def from_env(env=None) -> TrackerConfig:
    env = os.environ if env is None else env
    backend = env.get("PULSE_STORE_BACKEND", "local").strip().lower()
    if backend not in BACKENDS:
        raise ConfigError(f"PULSE_STORE_BACKEND must be one of {', '.join(BACKENDS)}, got {backend!r}")
    config = TrackerConfig(
        backend=backend,
        data_dir=env.get("PULSE_DATA_DIR") or ".pulse",
        slot_name=env.get("PULSE_SLOT_NAME") or DEFAULT_SLOT_NAME,
        firebase_root=env.get("PULSE_FIREBASE_ROOT") or "pulse",
        firebase_credentials=env.get("FIREBASE_CREDENTIALS"),
        firebase_database_url=env.get("FIREBASE_DATABASE_URL"),
        encryption_key=env.get("DATA_ENCRYPTION_KEY") or None,
        chart_width=_int_env(env, "PULSE_CHART_WIDTH", 500),
        chart_height=_int_env(env, "PULSE_CHART_HEIGHT", 300),
        chart_margin=_int_env(env, "PULSE_CHART_MARGIN", 40),
    )
    if config.chart_height <= 2 * config.chart_margin or config.chart_width <= 2 * config.chart_margin:
        raise ConfigError("Chart width and height must be larger than twice the margin")
    if backend == "firebase" and not (config.firebase_credentials and config.firebase_database_url):
        raise ConfigError("FIREBASE_CREDENTIALS and FIREBASE_DATABASE_URL must be set in the environment.")
    return config


def init_firebase(config: TrackerConfig):
    if firebase_admin._apps:
        return
    try:
        cred = credentials.Certificate(json.loads(config.firebase_credentials))
        firebase_admin.initialize_app(cred, {"databaseURL": config.firebase_database_url})
    except (ValueError, TypeError) as e:
        raise ConfigError("Firebase initialization error: " + str(e)) from e


def build_slot(config: TrackerConfig):
    if config.backend == "memory":
        return MemorySlot()
    if config.backend == "firebase":
        init_firebase(config)
        return FirebaseSlot(config.firebase_root, config.slot_name)
    return LocalFileSlot(config.data_dir, config.slot_name)


def build_codec(config: TrackerConfig):
    if not config.encryption_key:
        return JsonCodec()
    try:
        return FernetCodec(config.encryption_key)
    except ValueError as e:
        raise ConfigError("Error initializing encryption: " + str(e)) from e

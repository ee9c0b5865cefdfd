from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from relay.domain.room_ids import DEFAULT_ALPHABET, DEFAULT_LENGTH


def _default_config_path() -> Path:
    env_path = os.getenv("RELAY_CONFIG")
    if env_path:
        return Path(env_path)
    return Path(__file__).resolve().parent.parent / "config.yaml"


def _require_int(value: Any, default: int, name: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"{name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{name} must be an integer") from exc


def _require_positive(value: int, name: str) -> int:
    if value <= 0:
        raise ValueError(f"{name} must be positive")
    return value


def _section(data: dict[str, Any], name: str) -> dict[str, Any]:
    value = data.get(name)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be a mapping")
    return value


@dataclass(frozen=True)
class RegistrySettings:
    room_ttl_ms: int = 60_000
    id_alphabet: str = DEFAULT_ALPHABET
    id_length: int = DEFAULT_LENGTH

    def __post_init__(self) -> None:
        _require_positive(self.room_ttl_ms, "room_ttl_ms")
        _require_positive(self.id_length, "room_id.length")
        if not self.id_alphabet:
            raise ValueError("room_id.alphabet must not be empty")
        if len(set(self.id_alphabet)) != len(self.id_alphabet):
            raise ValueError("room_id.alphabet must not repeat characters")

    @property
    def room_ttl_seconds(self) -> float:
        return self.room_ttl_ms / 1000


@dataclass(frozen=True)
class ServerSettings:
    host: str = "0.0.0.0"
    port: int = 3000
    allow_origins: tuple[str, ...] = ("*",)


@dataclass(frozen=True)
class Config:
    registry: RegistrySettings = field(default_factory=RegistrySettings)
    server: ServerSettings = field(default_factory=ServerSettings)
    log_level: str = "INFO"

    @classmethod
    def load(cls, path: Path | str | None = None) -> "Config":
        config_path = Path(path) if path else _default_config_path()
        if not config_path.exists():
            config = cls()
        else:
            raw = yaml.safe_load(config_path.read_text()) or {}
            if not isinstance(raw, dict):
                raise ValueError("config.yaml must contain a mapping")
            config = cls.from_dict(raw)
        return config.with_env_overrides()

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        defaults = cls()
        room_id = _section(data, "room_id")
        server = _section(data, "server")
        cors = _section(data, "cors")

        registry = RegistrySettings(
            room_ttl_ms=_require_int(
                data.get("room_ttl_ms"),
                defaults.registry.room_ttl_ms,
                "room_ttl_ms",
            ),
            id_alphabet=str(room_id.get("alphabet") or defaults.registry.id_alphabet),
            id_length=_require_int(
                room_id.get("length"),
                defaults.registry.id_length,
                "room_id.length",
            ),
        )

        origins = cors.get("allow_origins", defaults.server.allow_origins)
        if isinstance(origins, str):
            origins = [origins]
        if not isinstance(origins, (list, tuple)):
            raise ValueError("cors.allow_origins must be a list")

        return cls(
            registry=registry,
            server=ServerSettings(
                host=str(server.get("host") or defaults.server.host),
                port=_require_int(server.get("port"), defaults.server.port, "server.port"),
                allow_origins=tuple(str(origin) for origin in origins),
            ),
            log_level=str(data.get("log_level") or defaults.log_level).upper(),
        )

    def with_env_overrides(self) -> "Config":
        port = os.getenv("PORT")
        if not port:
            return self
        return Config(
            registry=self.registry,
            server=ServerSettings(
                host=self.server.host,
                port=_require_int(port, self.server.port, "PORT"),
                allow_origins=self.server.allow_origins,
            ),
            log_level=self.log_level,
        )

"""Configuration helpers for resolving dashboard settings across sources."""

from collections.abc import Mapping
from typing import Any

DEFAULT_DATA_PATH = "data/question_tagging.csv"


def get_nested(mapping: Mapping[str, Any] | None, path: tuple[str, ...]) -> Any:
    """Safely fetch a nested mapping value for a tuple path."""
    current: Any = mapping
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _clean_candidate(value: Any) -> str:
    if value is None:
        return ""
    out = str(value).strip()
    return out


def _resolve_value(candidates: list[tuple[str, Any]]) -> tuple[str, str]:
    for source, raw in candidates:
        value = _clean_candidate(raw)
        if value:
            return value, source
    return "", "missing"


def _as_maps(
    session: Mapping[str, Any] | None,
    secrets: Mapping[str, Any] | None,
    env: Mapping[str, Any] | None,
) -> tuple[Mapping[str, Any], Mapping[str, Any], Mapping[str, Any]]:
    session_map = session if isinstance(session, Mapping) else {}
    secrets_map = secrets if isinstance(secrets, Mapping) else {}
    env_map = env if isinstance(env, Mapping) else {}
    return session_map, secrets_map, env_map


def resolve_data_source(
    session: Mapping[str, Any] | None,
    secrets: Mapping[str, Any] | None,
    env: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Resolve the question tagging CSV path from session, secrets, and environment sources."""
    session_map, secrets_map, env_map = _as_maps(session, secrets, env)

    path, source = _resolve_value(
        [
            ("session", session_map.get("question_data_path")),
            ("secrets", secrets_map.get("QUESTION_DATA_PATH")),
            ("secrets", get_nested(secrets_map, ("data", "path"))),
            ("env", env_map.get("QUESTION_DATA_PATH")),
        ]
    )
    if not path:
        return {"path": DEFAULT_DATA_PATH, "source": "default"}
    return {"path": path, "source": source}


def resolve_example_seed(
    session: Mapping[str, Any] | None,
    secrets: Mapping[str, Any] | None,
    env: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Resolve an optional integer seed for example question selection.

    A value that is not an integer is treated as missing.
    """
    session_map, secrets_map, env_map = _as_maps(session, secrets, env)

    raw, source = _resolve_value(
        [
            ("session", session_map.get("example_seed")),
            ("secrets", secrets_map.get("EXAMPLE_SEED")),
            ("secrets", get_nested(secrets_map, ("data", "example_seed"))),
            ("env", env_map.get("EXAMPLE_SEED")),
        ]
    )
    try:
        seed = int(raw) if raw else None
    except ValueError:
        seed = None
    return {"seed": seed, "source": source if seed is not None else "missing"}


def resolve_app_password(
    session: Mapping[str, Any] | None,
    secrets: Mapping[str, Any] | None,
    env: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Resolve application password from session, secrets, and environment sources."""
    session_map, secrets_map, env_map = _as_maps(session, secrets, env)

    password, source = _resolve_value(
        [
            ("session", session_map.get("app_password")),
            ("secrets", secrets_map.get("APP_PASSWORD")),
            ("secrets", get_nested(secrets_map, ("auth", "password"))),
            ("secrets", secrets_map.get("password")),
            ("env", env_map.get("APP_PASSWORD")),
        ]
    )

    return {"password": password, "source": source}

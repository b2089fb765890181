"""
Shared configuration loading and validation helpers.

Provides:
 - `load_config`: basic YAML loader
 - `load_logging_config`: the top-level `logging` section of a config file
 - `load_task_config`: validated configuration for a given task
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping

from common.base.file_io import read_yaml


ConfigDict = Dict[str, Any]

LOGGING_SECTION_KEY = "logging"
TASKS_SECTION_KEY = "tasks"


TASK_SCHEMAS: Dict[str, Dict[str, Iterable[str]]] = {
    "sanitize_fs": {
        "required": [],
        "optional": ["roots", "dry_run", "workers", "progress"],
    },
}

FIELD_ALIASES = {
    "root": "roots",
    "threads": "workers",
}

MULTI_PATH_FIELDS = {"roots"}
BOOLEAN_FIELDS = {"dry_run", "progress"}
POSITIVE_INTEGER_FIELDS = {"workers"}
LOGGING_ALLOWED_KEYS = {"level", "use_rich", "log_dir", "file_prefix"}

YES_VALUES = {"1", "true", "yes", "y", "on"}
NO_VALUES = {"0", "false", "no", "n", "off"}


def load_config(path: str | Path | None) -> Mapping[str, Any]:
    if not path:
        return {}

    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {cfg_path}")

    data = read_yaml(cfg_path)
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration root must be a mapping in {cfg_path}")

    return data


def load_logging_config(config_path: str | Path | None = None) -> Dict[str, Any]:
    root = load_config(config_path)
    return _extract_logging_settings(root, Path(config_path) if config_path else None)


def load_task_config(task: str, config_path: str | Path) -> ConfigDict:
    """
    Load and validate the section for ``task`` from a YAML config file.

    Files may either carry a ``tasks:`` mapping keyed by task name or be a
    single-task file whose root holds the task keys directly. The result is a
    flat dict of normalized values plus ``__task__``, ``__config_path__`` and,
    when any logging settings exist, ``__logging__``.

    Raises:
        ValueError: Unknown task, unsupported keys or malformed values.
        FileNotFoundError: ``config_path`` does not exist.
    """
    if task not in TASK_SCHEMAS:
        raise ValueError(f"Unknown task '{task}'. Expected one of: {', '.join(sorted(TASK_SCHEMAS))}")

    resolved_path = Path(config_path).expanduser()
    root_config = dict(load_config(resolved_path))
    task_config_raw = _extract_task_config(root_config, task, resolved_path)

    task_logging_override: Dict[str, Any] = {}
    if LOGGING_SECTION_KEY in task_config_raw:
        logging_payload = task_config_raw.pop(LOGGING_SECTION_KEY)
        if not isinstance(logging_payload, Mapping):
            raise ValueError(
                f"Task '{task}' logging section must be a mapping in {resolved_path}"
            )
        task_logging_override = _validate_logging_keys(dict(logging_payload), resolved_path)

    config = _apply_aliases(task_config_raw)

    schema = TASK_SCHEMAS[task]
    required = set(schema.get("required", []))
    optional = set(schema.get("optional", []))
    allowed_keys = required | optional

    missing = [key for key in sorted(required) if not config.get(key)]
    if missing:
        raise ValueError(
            f"Configuration '{resolved_path}' missing required fields for task '{task}': {', '.join(missing)}"
        )

    unexpected = [key for key in config if key not in allowed_keys]
    if unexpected:
        raise ValueError(
            f"Configuration '{resolved_path}' contains unsupported keys for task '{task}': {', '.join(sorted(unexpected))}"
        )

    normalized: ConfigDict = {}
    for key, value in config.items():
        if key in MULTI_PATH_FIELDS:
            normalized[key] = _normalize_multi_path(value)
        elif key in BOOLEAN_FIELDS:
            normalized[key] = _coerce_bool(value, key, resolved_path)
        elif key in POSITIVE_INTEGER_FIELDS:
            normalized[key] = None if value in (None, "") else _coerce_positive_int(value, key, resolved_path)
        else:
            normalized[key] = value

    normalized["__task__"] = task
    normalized["__config_path__"] = str(resolved_path)

    merged_logging = _extract_logging_settings(root_config, resolved_path)
    merged_logging.update(task_logging_override)
    if merged_logging.get("log_dir"):
        merged_logging["log_dir"] = _anchor_path(merged_logging["log_dir"], resolved_path.parent)
    if merged_logging:
        normalized["__logging__"] = merged_logging
    return normalized


def _apply_aliases(config: Mapping[str, Any]) -> ConfigDict:
    result: ConfigDict = {}
    for key, value in config.items():
        canonical = FIELD_ALIASES.get(key, key)
        result[canonical] = value
    return result


def _normalize_multi_path(value: Any) -> List[str]:
    if value is None:
        raise ValueError("Expected a list of paths, received None")
    if isinstance(value, (list, tuple, set)):
        values = list(value)
    else:
        values = [value]
    if not values:
        raise ValueError("Expected at least one path entry")
    return [str(Path(str(item)).expanduser()) for item in values]


def _coerce_bool(value: Any, field: str, config_path: Path) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in YES_VALUES:
        return True
    if text in NO_VALUES:
        return False
    raise ValueError(
        f"Configuration '{config_path}' field '{field}' must be a boolean."
    )


def _coerce_positive_int(value: Any, field: str, config_path: Path) -> int:
    if isinstance(value, bool):
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be an integer."
        )
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be an integer."
        ) from exc
    if number < 1:
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be at least 1."
        )
    return number


def _anchor_path(value: Any, base: Path) -> str:
    path = Path(str(value)).expanduser()
    if not path.is_absolute():
        path = base / path
    return str(path.resolve())


def _extract_task_config(root: Mapping[str, Any], task: str, config_path: Path) -> ConfigDict:
    if TASKS_SECTION_KEY in root:
        tasks_section = root.get(TASKS_SECTION_KEY) or {}
        if not isinstance(tasks_section, Mapping):
            raise ValueError(f"'tasks' section must be a mapping in {config_path}")
        if task not in tasks_section:
            raise ValueError(
                f"Configuration '{config_path}' missing task '{task}' under 'tasks' section"
            )
        task_payload = tasks_section[task] or {}
        if not isinstance(task_payload, Mapping):
            raise ValueError(f"Task '{task}' entry must be a mapping in {config_path}")
        return dict(task_payload)

    # Single-task files keep the task keys at the root.
    return {key: value for key, value in root.items() if key != LOGGING_SECTION_KEY}


def _validate_logging_keys(section: Dict[str, Any], config_path: Path) -> Dict[str, Any]:
    invalid = [key for key in section if key not in LOGGING_ALLOWED_KEYS]
    if invalid:
        raise ValueError(
            f"Logging section contains unsupported keys in {config_path}: {', '.join(sorted(invalid))}"
        )
    return section


def _extract_logging_settings(root: Mapping[str, Any], config_path: Path | None) -> Dict[str, Any]:
    section = root.get(LOGGING_SECTION_KEY, {})
    if not section:
        return {}
    if not isinstance(section, Mapping):
        raise ValueError(f"'{LOGGING_SECTION_KEY}' section must be a mapping in {config_path}")
    return _validate_logging_keys(dict(section), config_path or Path("<config>"))

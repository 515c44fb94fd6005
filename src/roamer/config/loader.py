"""YAML loaders for the cluster config and job topology files."""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any, Mapping

import yaml

from roamer._exceptions import InvalidConfiguration
from roamer.capacity import ClusterCapacity
from roamer.job import Job, Task, TaskGroup
from roamer.weights import WeightEntry, WeightTable

logger = logging.getLogger(__name__)

_ENV_OVERRIDES = {
    "cpu": "ROAMER_CPU",
    "memory": "ROAMER_MEMORY",
    "safety_margin": "ROAMER_SAFETY_MARGIN",
}


def _read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except FileNotFoundError:
        # Left to the caller; the CLI reports it the way a shell would.
        raise
    except OSError as exc:
        raise InvalidConfiguration(f"{path}: {exc.strerror or exc}") from exc
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise InvalidConfiguration(f"{path}: invalid YAML: {exc}") from exc


def _mapping(value: Any, where: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise InvalidConfiguration(f"{where} must be a mapping; got {type(value).__name__}.")
    return value


def _list(value: Any, where: str) -> list[Any]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise InvalidConfiguration(f"{where} must be a list; got {type(value).__name__}.")
    return value


def _int(value: Any, where: str) -> int:
    if isinstance(value, bool):
        raise InvalidConfiguration(f"{where} must be an integer; got {value!r}.")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidConfiguration(f"{where} must be an integer; got {value!r}.")


@dataclass(frozen=True)
class RoamerConfig:
    capacity: ClusterCapacity
    weights: WeightTable

    @classmethod
    def load(cls, path: Path) -> "RoamerConfig":
        data = _read_yaml(Path(path))
        try:
            config = cls.from_dict(data, env=os.environ)
        except InvalidConfiguration as exc:
            logger.debug("Rejected config %s: %s", path, exc)
            raise InvalidConfiguration(f"{path}: {exc}", group=exc.group) from exc
        logger.info(
            "Loaded config %s: cpu=%d memory=%d safety_margin=%d%% weights=%d",
            path,
            config.capacity.compute,
            config.capacity.memory,
            config.capacity.safety_margin,
            len(config.weights),
        )
        return config

    @classmethod
    def from_dict(cls, data: Any, env: Mapping[str, str] | None = None) -> "RoamerConfig":
        """Build a config from parsed data; overrides apply only when ``env`` is given."""
        data = _mapping(data, "config")
        infra = dict(_mapping(data.get("infrastructure"), "infrastructure"))
        for key, var in _ENV_OVERRIDES.items():
            override = (env or {}).get(var)
            if override:
                logger.info("Overriding infrastructure.%s from %s", key, var)
                infra[key] = override

        for key in ("cpu", "memory"):
            if key not in infra:
                raise InvalidConfiguration(f"infrastructure.{key} is required.")
        margin = infra.get("safety_margin")
        capacity = ClusterCapacity(
            compute=_int(infra["cpu"], "infrastructure.cpu"),
            memory=_int(infra["memory"], "infrastructure.memory"),
            safety_margin=None if margin is None else _int(margin, "infrastructure.safety_margin"),
        )

        entries = []
        for i, raw in enumerate(_list(data.get("groups"), "groups")):
            raw = _mapping(raw, f"groups[{i}]")
            if "name" not in raw or "weight" not in raw:
                raise InvalidConfiguration(f"groups[{i}] needs both 'name' and 'weight'.")
            entries.append(
                WeightEntry(str(raw["name"]), _int(raw["weight"], f"groups[{i}].weight"))
            )
        return cls(capacity=capacity, weights=WeightTable.build(entries))


def parse_job(data: Any) -> Job:
    data = _mapping(data, "job")
    groups = []
    for i, raw in enumerate(_list(data.get("groups"), "groups")):
        raw = _mapping(raw, f"groups[{i}]")
        if "name" not in raw:
            raise InvalidConfiguration(f"groups[{i}] needs a 'name'.")
        count = raw.get("count")
        tasks = []
        for j, raw_task in enumerate(_list(raw.get("tasks"), f"groups[{i}].tasks")):
            raw_task = _mapping(raw_task, f"groups[{i}].tasks[{j}]")
            if "name" not in raw_task:
                raise InvalidConfiguration(f"groups[{i}].tasks[{j}] needs a 'name'.")
            tasks.append(Task(str(raw_task["name"])))
        groups.append(
            TaskGroup(
                str(raw["name"]),
                tasks,
                count=None if count is None else _int(count, f"groups[{i}].count"),
            )
        )
    job = Job(groups, name=data.get("name"))
    job.validate()
    return job


def load_job(path: Path) -> Job:
    data = _read_yaml(Path(path))
    try:
        job = parse_job(data)
    except InvalidConfiguration as exc:
        raise InvalidConfiguration(f"{path}: {exc}", group=exc.group) from exc
    logger.info(
        "Loaded job %s: %d groups, %d tasks",
        job.name or path,
        len(job.groups),
        job.total_task_count,
    )
    return job

"""Audit configuration: weights, priority thresholds, scope and path rules.

Loaded once per run from an optional JSON file and never mutated afterward.
A missing file means defaults; a file that exists but cannot be read or
does not have the expected shape is a ConfigError.
"""
from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

CONFIG_RELPATH = os.path.join(".cursor", ".audit", "workflow-refactor-audit-config.json")

DEFAULT_BASE_WEIGHT = 10
DEFAULT_INCLUDE_EXTENSIONS = (".ts", ".mts", ".cts")
DEFAULT_EXPORT_AGGREGATOR = ".cursor/commands/index.ts"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class Weights:
    base_by_kind: dict[str, int | float] = field(default_factory=dict)
    file_weight: int | float = 0
    line_weight: int | float = 0
    text_weight: int | float = 0
    blast_radius_per_file: int | float = 2

    def base(self, kind: str) -> int | float:
        return self.base_by_kind.get(kind, DEFAULT_BASE_WEIGHT)


@dataclass(frozen=True)
class Priorities:
    p0_min_score: int | float = 18
    p1_min_score: int | float = 10


@dataclass(frozen=True)
class Scope:
    ignore_contains: tuple[str, ...] = ()
    include_extensions: tuple[str, ...] = DEFAULT_INCLUDE_EXTENSIONS

    def is_ignored(self, repo_path: str) -> bool:
        return any(frag in repo_path for frag in self.ignore_contains)

    def includes(self, file_path: str) -> bool:
        return file_path.endswith(self.include_extensions)


@dataclass(frozen=True)
class PathRules:
    allow_hardcoded_in: tuple[str, ...] = ()
    export_aggregator: str = DEFAULT_EXPORT_AGGREGATOR

    def is_hardcoding_allowed(self, repo_path: str) -> bool:
        return any(
            repo_path.endswith(p) or p in repo_path
            for p in self.allow_hardcoded_in
        )


@dataclass(frozen=True)
class AuditConfig:
    weights: Weights = field(default_factory=Weights)
    priorities: Priorities = field(default_factory=Priorities)
    scope: Scope = field(default_factory=Scope)
    paths: PathRules = field(default_factory=PathRules)


def default_config_path(project_root: str) -> str:
    return os.path.join(os.path.abspath(project_root), CONFIG_RELPATH)


def load_config(config_path: str) -> AuditConfig:
    """Load config from file, returning defaults if the file does not exist."""
    if not os.path.exists(config_path):
        logger.debug("No config at %s, using defaults", config_path)
        return AuditConfig()
    try:
        with open(config_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read config {config_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in config {config_path}: {e}") from e
    logger.debug("Loaded config from %s", config_path)
    return parse_config(raw)


def parse_config(raw: object) -> AuditConfig:
    """Map the JSON document onto AuditConfig. Unknown keys are ignored."""
    if not isinstance(raw, dict):
        raise ConfigError("config must be a JSON object")

    w = _section(raw, "weights")
    base_by_kind = _section(w, "baseByKind", where="weights.baseByKind")
    weights = Weights(
        base_by_kind={
            str(k): _number(v, None, f"weights.baseByKind.{k}")
            for k, v in base_by_kind.items()
        },
        file_weight=_number(w.get("fileWeight"), 0, "weights.fileWeight"),
        line_weight=_number(w.get("lineWeight"), 0, "weights.lineWeight"),
        text_weight=_number(w.get("textWeight"), 0, "weights.textWeight"),
        blast_radius_per_file=_number(
            w.get("blastRadiusPerFile"), 2, "weights.blastRadiusPerFile"
        ),
    )

    p = _section(raw, "priorities")
    priorities = Priorities(
        p0_min_score=_number(p.get("p0MinScore"), 18, "priorities.p0MinScore"),
        p1_min_score=_number(p.get("p1MinScore"), 10, "priorities.p1MinScore"),
    )
    if priorities.p0_min_score < priorities.p1_min_score:
        raise ConfigError(
            "priorities.p0MinScore must be >= priorities.p1MinScore "
            f"(got {priorities.p0_min_score} < {priorities.p1_min_score})"
        )

    s = _section(raw, "scope")
    scope = Scope(
        ignore_contains=_strings(s.get("ignoreContains"), (), "scope.ignoreContains"),
        include_extensions=_strings(
            s.get("includeExtensions"), DEFAULT_INCLUDE_EXTENSIONS, "scope.includeExtensions"
        ),
    )

    paths = _section(raw, "paths")
    aggregator = paths.get("exportAggregator", DEFAULT_EXPORT_AGGREGATOR)
    if not isinstance(aggregator, str) or not aggregator:
        raise ConfigError("paths.exportAggregator must be a non-empty string")
    path_rules = PathRules(
        allow_hardcoded_in=_strings(paths.get("allowHardcodedIn"), (), "paths.allowHardcodedIn"),
        export_aggregator=aggregator,
    )

    return AuditConfig(weights=weights, priorities=priorities, scope=scope, paths=path_rules)


def _section(raw: dict, key: str, where: str | None = None) -> dict:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"{where or key} must be an object")
    return value


def _number(value: object, default: int | float | None, where: str) -> int | float:
    if value is None and default is not None:
        return default
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ConfigError(f"{where} must be a number, got {value!r}")
    return value


def _strings(value: object, default: tuple[str, ...], where: str) -> tuple[str, ...]:
    if value is None:
        return default
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{where} must be a list of strings")
    return tuple(value)

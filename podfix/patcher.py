from __future__ import annotations

import logging
import warnings
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from podfix.descriptor import SettingValue, open_descriptor
from podfix.errors import NoMatchWarning

logger = logging.getLogger(__name__)


@dataclass
class PatchedConfiguration:
    target: str
    configuration: str
    # keys whose stored value differed before the write
    changed: list[str] = field(default_factory=list)
    # 1-based position among the matched targets; names may repeat
    target_index: int = 1


@dataclass
class PatchReport:
    """What a call to :func:`patch` touched."""

    path: Path
    target_name: str
    matched_targets: int = 0
    patched: list[PatchedConfiguration] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return any(entry.changed for entry in self.patched)

    @property
    def configurations(self) -> list[str]:
        return [entry.configuration for entry in self.patched]


def _check_overrides(overrides: Mapping[str, SettingValue]) -> dict[str, SettingValue]:
    if not overrides:
        raise ValueError("overrides must not be empty")
    checked = {}
    for key, value in overrides.items():
        if not isinstance(key, str) or not key:
            raise ValueError(f"setting key must be a non-empty string, got {key!r}")
        if isinstance(value, (list, tuple)):
            if not all(isinstance(item, str) for item in value):
                raise ValueError(f"{key}: list values must contain only strings")
            value = list(value)
        elif not isinstance(value, str):
            raise ValueError(f"{key}: value must be a string or a list of strings, got {type(value).__name__}")
        checked[key] = value
    return checked


def patch(path, target_name: str, overrides: Mapping[str, SettingValue]) -> PatchReport:
    """Write ``overrides`` into every build configuration of ``target_name``.

    Every target whose name equals ``target_name`` is patched, not just the
    first. Each key is assigned as-is: a string replaces whatever was stored, a
    list replaces the whole stored list. The project is saved back to ``path``
    afterwards, even when no target matched.

    Raises:
        LoadError: ``path`` is missing or is not a project file.
        SaveError: the project could not be written back.
        ValueError: empty ``target_name`` or malformed ``overrides``.
    """
    if not target_name:
        raise ValueError("target_name must not be empty")
    overrides = _check_overrides(overrides)

    descriptor = open_descriptor(path)
    report = PatchReport(path=descriptor.path, target_name=target_name)

    for target in descriptor.targets():
        if target.name != target_name:
            continue
        report.matched_targets += 1
        logger.info("Found %s target, fixing build settings", target.name)
        for configuration in target.configurations():
            settings = configuration.settings
            changed = []
            for key, value in overrides.items():
                if settings.get(key) != value:
                    logger.debug("%s/%s: %s = %r (was %r)", target.name, configuration.name, key, value, settings.get(key))
                    changed.append(key)
                # copy so later edits to the caller's list don't leak in
                settings[key] = list(value) if isinstance(value, list) else value
            report.patched.append(PatchedConfiguration(target.name, configuration.name, changed, report.matched_targets))
            logger.info("Fixed %s configuration", configuration.name)

    if not report.matched_targets:
        warnings.warn(f"no target named {target_name!r} in {descriptor.path}", NoMatchWarning, stacklevel=2)

    descriptor.save()
    return report

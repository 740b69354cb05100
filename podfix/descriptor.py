"""Project descriptors: targets, build configurations and their settings.

A descriptor is loaded from a file, mutated in memory and written back in
place. Two on-disk formats are understood:

- the ASCII (OpenStep) ``project.pbxproj`` written by Xcode and CocoaPods,
  handled by the ``pbxproj`` library;
- the same object graph stored as an XML or binary property list
  (``plutil -convert xml1 project.pbxproj``), handled by ``plistlib``.

Use :func:`open_descriptor` to pick the right one for a path.
"""

from __future__ import annotations

import logging
import plistlib
from abc import ABC, abstractmethod
from collections.abc import Iterator, MutableMapping
from pathlib import Path
from typing import Callable, Union
from xml.parsers.expat import ExpatError

from pbxproj import XcodeProject
from pbxproj.PBXGenericObject import PBXGenericObject
from pbxproj.PBXList import PBXList

from podfix.errors import LoadError, SaveError

logger = logging.getLogger(__name__)

SettingValue = Union[str, list]

PBXPROJ_NAME = "project.pbxproj"


class BuildConfiguration:
    """A named variant (Debug, Release, ...) of a target's settings."""

    def __init__(self, name: str, settings: MutableMapping):
        self.name = name
        self.settings = settings

    def __repr__(self):
        return f"BuildConfiguration({self.name!r})"


class Target:
    """A named build unit. Configurations are read on demand."""

    def __init__(self, name: str, configurations: Callable[[], Iterator[BuildConfiguration]]):
        self.name = name
        self._configurations = configurations

    def configurations(self) -> Iterator[BuildConfiguration]:
        return self._configurations()

    def __repr__(self):
        return f"Target({self.name!r})"


class ProjectDescriptor(ABC):
    """In-memory, mutable view of a project file."""

    def __init__(self, path):
        self.path = Path(path)

    @classmethod
    @abstractmethod
    def load(cls, path) -> ProjectDescriptor:
        ...

    @abstractmethod
    def targets(self) -> Iterator[Target]:
        ...

    @abstractmethod
    def save(self) -> None:
        """Write the descriptor back to ``self.path``, replacing the file."""


# -- pbxproj (OpenStep) ---------------------------------------------------


class _PbxSettings(MutableMapping):
    """buildSettings of an XCBuildConfiguration as a plain mapping.

    Keys are attributes on the library's object. Lists are stored as
    ``PBXList`` so they are written as ``( ... )`` even with one element.
    """

    def __init__(self, configuration):
        self._configuration = configuration

    def _settings(self, create=False):
        settings = getattr(self._configuration, "buildSettings", None)
        if settings is None and create:
            settings = PBXGenericObject(self._configuration)
            setattr(self._configuration, "buildSettings", settings)
        return settings

    def _keys(self):
        settings = self._settings()
        if settings is None:
            return []
        return [key for key in vars(settings) if not key.startswith("_")]

    def __getitem__(self, key):
        settings = self._settings()
        if key not in self._keys():
            raise KeyError(key)
        value = getattr(settings, key)
        if isinstance(value, list):
            return [str(item) for item in value]
        return str(value)

    def __setitem__(self, key, value):
        settings = self._settings(create=True)
        if isinstance(value, list):
            value = PBXList(list(value))
        setattr(settings, key, value)

    def __delitem__(self, key):
        if key not in self._keys():
            raise KeyError(key)
        delattr(self._settings(), key)

    def __iter__(self):
        return iter(self._keys())

    def __len__(self):
        return len(self._keys())


class PbxprojDescriptor(ProjectDescriptor):
    """ASCII ``project.pbxproj`` file, parsed with mod-pbxproj."""

    def __init__(self, path, project):
        super().__init__(path)
        self._project = project

    @classmethod
    def load(cls, path):
        path = Path(path)
        if not path.is_file():
            raise LoadError(path, "no such file")
        try:
            project = XcodeProject.load(str(path))
        except Exception as exc:
            raise LoadError(path, f"not a valid project file ({exc})") from exc
        return cls(path, project)

    def _resolve(self, object_id):
        obj = self._project.objects[object_id]
        if obj is None:
            raise LoadError(self.path, f"dangling reference {object_id}")
        return obj

    def targets(self):
        root = self._resolve(self._project["rootObject"])
        for target_id in getattr(root, "targets", []):
            target = self._resolve(target_id)
            yield Target(str(target.name), lambda target=target: self._configurations(target))

    def _configurations(self, target):
        list_id = getattr(target, "buildConfigurationList", None)
        if list_id is None:
            return
        configuration_list = self._resolve(list_id)
        for configuration_id in getattr(configuration_list, "buildConfigurations", []):
            configuration = self._resolve(configuration_id)
            yield BuildConfiguration(str(configuration.name), _PbxSettings(configuration))

    def save(self):
        try:
            self._project.save(str(self.path))
        except OSError as exc:
            raise SaveError(self.path, exc.strerror or str(exc)) from exc
        logger.debug("Wrote %s", self.path)


# -- property list ----------------------------------------------------------


class _DictSettings(MutableMapping):
    """buildSettings dictionary, created on first write if missing."""

    def __init__(self, configuration: dict):
        self._configuration = configuration

    def _settings(self, create=False):
        if create:
            return self._configuration.setdefault("buildSettings", {})
        return self._configuration.get("buildSettings", {})

    def __getitem__(self, key):
        value = self._settings()[key]
        if isinstance(value, list):
            return list(value)
        return value

    def __setitem__(self, key, value):
        if isinstance(value, list):
            value = list(value)
        self._settings(create=True)[key] = value

    def __delitem__(self, key):
        del self._settings()[key]

    def __iter__(self):
        return iter(list(self._settings()))

    def __len__(self):
        return len(self._settings())


class PlistDescriptor(ProjectDescriptor):
    """Project stored as an XML or binary property list."""

    def __init__(self, path, data: dict, fmt=plistlib.FMT_XML):
        super().__init__(path)
        self._data = data
        self._fmt = fmt

    @classmethod
    def load(cls, path):
        path = Path(path)
        if not path.is_file():
            raise LoadError(path, "no such file")
        with open(path, "rb") as fp:
            header = fp.read(8)
            fp.seek(0)
            try:
                data = plistlib.load(fp)
            except (ValueError, ExpatError) as exc:
                raise LoadError(path, f"not a valid property list ({exc})") from exc
        if not isinstance(data, dict) or not isinstance(data.get("objects"), dict):
            raise LoadError(path, "property list has no 'objects' dictionary")
        if data.get("rootObject") not in data["objects"]:
            raise LoadError(path, "property list has no root object")
        fmt = plistlib.FMT_BINARY if header == b"bplist00" else plistlib.FMT_XML
        return cls(path, data, fmt)

    def _resolve(self, object_id):
        try:
            return self._data["objects"][object_id]
        except KeyError:
            raise LoadError(self.path, f"dangling reference {object_id}") from None

    def targets(self):
        root = self._resolve(self._data["rootObject"])
        for target_id in root.get("targets", []):
            target = self._resolve(target_id)
            yield Target(target.get("name", ""), lambda target=target: self._configurations(target))

    def _configurations(self, target):
        list_id = target.get("buildConfigurationList")
        if list_id is None:
            return
        for configuration_id in self._resolve(list_id).get("buildConfigurations", []):
            configuration = self._resolve(configuration_id)
            yield BuildConfiguration(configuration.get("name", ""), _DictSettings(configuration))

    def save(self):
        try:
            with open(self.path, "wb") as fp:
                plistlib.dump(self._data, fp, fmt=self._fmt, sort_keys=False)
        except OSError as exc:
            raise SaveError(self.path, exc.strerror or str(exc)) from exc
        logger.debug("Wrote %s", self.path)


def resolve_project_file(path) -> Path:
    """Map an ``.xcodeproj`` bundle to the ``project.pbxproj`` inside it."""
    path = Path(path)
    if path.is_dir():
        return path / PBXPROJ_NAME
    return path


def open_descriptor(path) -> ProjectDescriptor:
    """Load ``path`` with the descriptor class matching its contents."""
    project_file = resolve_project_file(path)
    if not project_file.is_file():
        raise LoadError(project_file, "no such file")
    try:
        with open(project_file, "rb") as fp:
            header = fp.read(64)
    except OSError as exc:
        raise LoadError(project_file, exc.strerror or str(exc)) from exc

    stripped = header.lstrip()
    if header.startswith(b"bplist00") or stripped.startswith((b"<?xml", b"<!DOCTYPE plist", b"<plist")):
        cls = PlistDescriptor
    else:
        cls = PbxprojDescriptor
    logger.debug("Loading %s as %s", project_file, cls.__name__)
    return cls.load(project_file)

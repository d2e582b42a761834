"""Collections of localised resources gathered from packed resource files.

Resource names are read as ``name[_language][_COUNTRY].extension``. Each
resource keeps its variants ordered by locale score, best first. Variants
that score zero or less for the current locale are dropped.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterable, Iterator
from typing import Optional

from einsteinpuzzle.resourcefile import (
    DirectoryEntry,
    ResourceError,
    ResourceFile,
    ResourceStream,
)

LocaleScore = Callable[[str, str], int]


def _is_language(part: str) -> bool:
    return len(part) == 2 and part.isalpha() and part.islower()


def _is_country(part: str) -> bool:
    return len(part) == 2 and part.isalpha() and part.isupper()


def split_file_name(name: str) -> tuple[str, str, str, str]:
    """Split a resource name into ``(name, extension, language, country)``."""
    base, dot, ext = name.rpartition(".")
    if not dot:
        base, ext = name, ""
    language = country = ""
    head, sep, tail = base.rpartition("_")
    if sep and head and _is_country(tail):
        country = tail
        base = head
        head, sep, tail = base.rpartition("_")
    if sep and head and _is_language(tail):
        language = tail
        base = head
    return base, ext, language, country


class ResVariant:
    """One localised copy of a resource inside a resource file."""

    def __init__(self, file: ResourceFile, score: int, entry: DirectoryEntry) -> None:
        self.file = file
        self.i18n_score = score
        self.offset = entry.offset
        self.unpacked_size = entry.unpacked_size
        self.packed_size = entry.packed_size
        self.level = entry.level

    @property
    def size(self) -> int:
        """Size of the unpacked data."""
        return self.unpacked_size

    def get_data(self) -> bytes:
        """Load and unpack the data of this variant."""
        return self.file.load(
            self.offset, self.packed_size, self.unpacked_size, self.level
        )

    def create_stream(self) -> ResourceStream:
        """Open a sequential reader over the unpacked data."""
        if self.level:
            return ResourceStream.from_bytes(self.get_data())
        return ResourceStream(self.file.stream, self.offset, self.packed_size)


class Resource:
    """All variants of a resource that share one name."""

    def __init__(
        self, file: ResourceFile, score: int, entry: DirectoryEntry, name: str
    ) -> None:
        self.name = name
        self.variants: list[ResVariant] = []
        self.add_variant(file, score, entry)

    def add_variant(self, file: ResourceFile, score: int, entry: DirectoryEntry) -> None:
        """Add a variant, replacing any existing variant with the same score."""
        variant = ResVariant(file, score, entry)
        for index, existing in enumerate(self.variants):
            if existing.i18n_score == score:
                self.variants[index] = variant
                return
        self.variants.append(variant)
        self.variants.sort(key=lambda v: v.i18n_score, reverse=True)

    def __len__(self) -> int:
        return len(self.variants)

    def get_variant(self, variant: int = 0) -> ResVariant:
        return self.variants[variant]

    def size(self, variant: int = 0) -> int:
        return self.variants[variant].size

    def get_data(self, variant: int = 0) -> bytes:
        return self.variants[variant].get_data()

    def create_stream(self, variant: int = 0) -> ResourceStream:
        return self.variants[variant].create_stream()


class ResourcesCollection:
    """Resources from every ``.res`` file found in a list of directories.

    Files are processed in order of decreasing priority; a variant from a
    file processed later replaces an earlier one with the same locale score.
    Without a ``locale_score`` function only resources that carry neither a
    language nor a country are accepted.
    """

    def __init__(
        self,
        directories: Iterable[str | os.PathLike[str]],
        locale_score: Optional[LocaleScore] = None,
    ) -> None:
        self._locale_score = locale_score
        self._resources: dict[str, Resource] = {}
        self._groups: dict[str, list[Resource]] = {}
        self.files: list[ResourceFile] = []
        try:
            self._load_resource_files(directories)
            self.files.sort(key=lambda f: f.priority, reverse=True)
            self._process_files()
        except BaseException:
            self.close()
            raise

    def _score(self, language: str, country: str) -> int:
        if self._locale_score is not None:
            return self._locale_score(language, country)
        if language or country:
            return 0
        return 1

    def _load_resource_files(self, directories: Iterable[str | os.PathLike[str]]) -> None:
        for directory in directories:
            directory = os.fspath(directory)
            try:
                names = sorted(entry.name for entry in os.scandir(directory))
            except OSError:
                continue
            for name in names:
                if name.startswith("."):
                    continue
                if len(name) > 4 and name[-4:].lower() == ".res":
                    self.files.append(ResourceFile(directory + "/" + name))

    def _process_files(self) -> None:
        for file in self.files:
            for entry in file.get_directory():
                name, ext, language, country = split_file_name(entry.name)
                score = self._score(language, country)
                if score <= 0:
                    continue
                res_name = f"{name}.{ext}"
                resource = self._resources.get(res_name)
                if resource is None:
                    resource = Resource(file, score, entry, res_name)
                    self._resources[res_name] = resource
                    if entry.group:
                        self._groups.setdefault(entry.group, []).append(resource)
                else:
                    resource.add_variant(file, score, entry)

    def __contains__(self, name: object) -> bool:
        return name in self._resources

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._resources))

    def get_resource(self, name: str) -> Resource:
        """Return the named resource or raise ResourceError."""
        try:
            return self._resources[name]
        except KeyError:
            raise ResourceError(f"Resource '{name}' not found") from None

    def get_data(self, name: str) -> bytes:
        """Return the data of the best variant of a resource."""
        return self.get_resource(name).get_data()

    def create_stream(self, name: str) -> ResourceStream:
        """Open a reader over the best variant of a resource."""
        return self.get_resource(name).create_stream()

    def for_each_in_group(self, name: str) -> Iterator[Resource]:
        """Yield every resource of a group; nothing if the group is unknown."""
        yield from self._groups.get(name, ())

    def close(self) -> None:
        for file in self.files:
            file.close()

    def __enter__(self) -> "ResourcesCollection":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
"""Loaders that fetch schema documents from files and HTTP URLs."""

from __future__ import annotations

import json
import os
import urllib.error
import urllib.request
from abc import ABC, abstractmethod
from typing import Iterable
from urllib.parse import urlparse

from schemakit.model import Schema
from schemakit.parse import (
    SchemaParseError,
    from_json_file,
    from_json_reader,
    from_yaml_file,
    from_yaml_reader,
)
from schemakit.reference import RefType, UnsupportedRefFormatError, get_ref_type

__all__ = [
    "CannotResolveSchemaError",
    "CannotLoadSchemaError",
    "UnsupportedURLError",
    "Loader",
    "CachedLoader",
    "FileLoader",
    "MultiLoader",
    "HTTPLoader",
    "qualified_file_name",
    "new_default_multi_loader",
    "new_default_cache_loader",
]

_YAML_CONTENT_TYPES = frozenset(
    {"application/yaml", "application/x-yaml", "text/yaml", "text/x-yaml"}
)


class CannotResolveSchemaError(Exception):
    """No file could be found for a schema reference."""


class CannotLoadSchemaError(Exception):
    """A schema could not be loaded."""


class UnsupportedURLError(Exception):
    """The URL has a scheme the loader does not handle."""


def _ext(path: str) -> str:
    """Return the extension of the last path element, dot included."""
    dot = path.rfind(".")
    return path[dot:] if dot > path.rfind("/") else ""


def _extension_set(items: Iterable[str]) -> frozenset[str]:
    return frozenset(item if item.startswith(".") else "." + item for item in items)


class Loader(ABC):
    """Something that loads a schema given its URI and the referring URI."""

    @abstractmethod
    def load(self, uri: str, parent_uri: str) -> Schema:
        """Load the schema at ``uri``, resolved against ``parent_uri``."""


class CachedLoader(Loader):
    """Wraps another loader and remembers schemas by URI."""

    def __init__(self, loader: Loader, cache: dict[str, Schema] | None = None) -> None:
        self.loader = loader
        self.cache = {} if cache is None else cache

    def load(self, uri: str, parent_uri: str) -> Schema:
        if uri in self.cache:
            return self.cache[uri]
        try:
            schema = self.loader.load(uri, parent_uri)
        except Exception as exc:
            raise CannotLoadSchemaError(f"cannot load schema\n{exc}") from exc
        self.cache[uri] = schema
        return schema


class FileLoader(Loader):
    """Loads schemas from the local file system."""

    def __init__(
        self,
        resolve_extensions: Iterable[str] = (),
        yaml_extensions: Iterable[str] = (),
    ) -> None:
        self.resolve_extensions = list(resolve_extensions)
        self.yaml_extensions = _extension_set(yaml_extensions)

    def load(self, file_name: str, parent_file_name: str) -> Schema:
        qualified = qualified_file_name(file_name, parent_file_name, self.resolve_extensions)
        return self._parse_file(qualified)

    def _parse_file(self, file_name: str) -> Schema:
        if _ext(file_name) in self.yaml_extensions:
            try:
                return from_yaml_file(file_name)
            except SchemaParseError as exc:
                raise SchemaParseError(f"error parsing YAML file {file_name}: {exc}") from exc
        try:
            return from_json_file(file_name)
        except SchemaParseError as exc:
            raise SchemaParseError(f"error parsing JSON file {file_name}: {exc}") from exc


class MultiLoader(dict, Loader):
    """Dispatches to a loader chosen by the reference's kind."""

    def load(self, uri: str, parent_uri: str) -> Schema:
        ref = get_ref_type(uri)
        loader = self.get(ref)
        if loader is None:
            raise UnsupportedRefFormatError()
        try:
            return loader.load(uri, parent_uri)
        except Exception as exc:
            raise CannotLoadSchemaError(
                f"failed to load schema {json.dumps(uri)}: {exc}"
            ) from exc


class HTTPLoader(Loader):
    """Fetches schemas over HTTP and HTTPS."""

    def __init__(self, yaml_extensions: Iterable[str] = ()) -> None:
        self.yaml_extensions = _extension_set(yaml_extensions)

    def load(self, uri: str, parent_uri: str) -> Schema:
        try:
            url = urlparse(uri)
        except ValueError as exc:
            raise ValueError(f"failed to parse url: {exc}") from exc

        if url.scheme not in ("http", "https"):
            raise UnsupportedURLError(f"unsupported URL: {json.dumps(uri)}")

        try:
            request = urllib.request.Request(url.geturl(), method="GET")
        except ValueError as exc:
            raise ValueError(f"failed to create request: {exc}") from exc

        try:
            response = urllib.request.urlopen(request)
        except urllib.error.HTTPError as exc:
            response = exc
        except (urllib.error.URLError, OSError) as exc:
            raise ConnectionError(f"failed to perform request: {exc}") from exc

        with response:
            content_type = response.headers.get("Content-Type", "")
            if content_type == "application/json":
                return from_json_reader(response)
            if content_type in _YAML_CONTENT_TYPES:
                return from_yaml_reader(response)
            if _ext(url.path) in self.yaml_extensions:
                return from_yaml_reader(response)
            return from_json_reader(response)


def qualified_file_name(
    file_name: str, parent_file_name: str, resolve_extensions: Iterable[str]
) -> str:
    """Resolve a file reference to the real path of an existing file.

    Relative names are taken relative to the directory of
    ``parent_file_name``; each of ``resolve_extensions`` is tried after the
    bare name. Non-file references are returned without their scheme.
    """
    if get_ref_type(file_name) is not RefType.FILE:
        return file_name[file_name.index("://") + 3:]

    if file_name.startswith("file://"):
        file_name = file_name[len("file://"):]

    if not os.path.isabs(file_name):
        file_name = os.path.normpath(
            os.path.join(os.path.dirname(parent_file_name), file_name)
        )

    for ext in ["", *resolve_extensions]:
        qualified = file_name + ext
        if not _file_exists(qualified):
            continue
        try:
            return os.path.realpath(qualified, strict=True)
        except OSError as exc:
            raise CannotResolveSchemaError(
                f"error resolving symlinks in {qualified}: {exc}"
            ) from exc

    raise CannotResolveSchemaError(f"cannot resolve schema {json.dumps(file_name)}")


def _file_exists(file_name: str) -> bool:
    try:
        os.stat(file_name)
    except FileNotFoundError:
        return False
    except OSError:
        return True
    return True


def new_default_multi_loader(
    resolve_extensions: Iterable[str], yaml_extensions: Iterable[str]
) -> MultiLoader:
    """Build a loader for file, HTTP and HTTPS references."""
    yaml_extensions = list(yaml_extensions)
    http_loader = HTTPLoader(yaml_extensions)
    return MultiLoader(
        {
            RefType.FILE: FileLoader(resolve_extensions, yaml_extensions),
            RefType.HTTP: http_loader,
            RefType.HTTPS: http_loader,
        }
    )


def new_default_cache_loader(
    resolve_extensions: Iterable[str], yaml_extensions: Iterable[str]
) -> CachedLoader:
    """Build the default multi-loader wrapped in a fresh cache."""
    return CachedLoader(new_default_multi_loader(resolve_extensions, yaml_extensions), {})
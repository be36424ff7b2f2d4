"""Reading of bundled and configured resource files."""

from __future__ import annotations

import codecs
from collections.abc import Iterable, Sequence
from pathlib import Path

from gscontext.common.exceptions import ConfigError, ResourceNotFoundError

DEFAULT_CHARSET = "UTF-8"
BUNDLED_RESOURCES = Path(__file__).resolve().parent / "resources"


class ResourceReader:
    """Resolve relative resource paths against an ordered list of roots.

    Configured roots are searched first, the package's bundled resources
    last. A path that escapes its root does not resolve.
    """

    def __init__(self, search_paths: Iterable[Path | str] | None = None, *, include_bundled: bool = True) -> None:
        roots = [Path(path) for path in (search_paths or [])]
        if include_bundled:
            roots.append(BUNDLED_RESOURCES)
        self._roots: Sequence[Path] = tuple(roots)

    @property
    def search_paths(self) -> Sequence[Path]:
        return self._roots

    def resolve(self, path: str) -> Path | None:
        relative = (path or "").strip().lstrip("/\\")
        if not relative:
            return None
        for root in self._roots:
            root = root.resolve()
            candidate = (root / relative).resolve()
            if not candidate.is_relative_to(root):
                continue
            if candidate.is_file():
                return candidate
        return None

    def read(self, path: str, charset: str | None = DEFAULT_CHARSET) -> str:
        """Read the resource at ``path`` decoded with ``charset``.

        Bytes that are invalid in ``charset`` become U+FFFD.

        Raises:
            ResourceNotFoundError: If no root contains the path.
            ConfigError: If ``charset`` is not a known text encoding.
        """
        if not charset:
            charset = DEFAULT_CHARSET
        try:
            codec = codecs.lookup(charset)
        except LookupError as exc:
            raise ConfigError(f"Unknown charset: {charset}", cause=exc) from exc
        if not getattr(codec, "_is_text_encoding", True):
            raise ConfigError(f"Not a text encoding: {charset}")

        location = self.resolve(path)
        if location is None:
            raise ResourceNotFoundError(
                f"Resource not found: {path}",
                path=path,
                search_paths=[str(root) for root in self._roots],
            )
        return location.read_bytes().decode(codec.name, errors="replace")


def read_resource(path: str, charset: str | None = DEFAULT_CHARSET, *, search_paths: Iterable[Path | str] | None = None) -> str:
    """Convenience wrapper around :class:`ResourceReader`."""
    return ResourceReader(search_paths).read(path, charset)


__all__ = ["BUNDLED_RESOURCES", "DEFAULT_CHARSET", "ResourceReader", "read_resource"]

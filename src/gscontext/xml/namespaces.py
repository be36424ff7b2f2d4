"""Namespace resolution bound to a caller-supplied prefix map."""

from __future__ import annotations

from collections.abc import Iterator, Mapping

# OGC service capability namespaces commonly passed by host scripts
OGC_NS = {
    "ogc": "http://www.opengis.net/ogc",
    "ows": "http://www.opengis.net/ows",
    "fes": "http://www.opengis.net/fes/2.0",
    "wfs": "http://www.opengis.net/wfs",
    "xlink": "http://www.w3.org/1999/xlink",
}

# Metadata record namespaces
CSW_NS = {
    "csw": "http://www.opengis.net/cat/csw/2.0.2",
    "dc": "http://purl.org/dc/elements/1.1/",
    "dct": "http://purl.org/dc/terms/",
    "gmd": "http://www.isotc211.org/2005/gmd",
    "gco": "http://www.isotc211.org/2005/gco",
}


class NamespaceContext:
    """Prefix/URI lookups that consult only the supplied map.

    A missing map means every lookup yields no binding.
    """

    def __init__(self, namespace_map: Mapping[str, str] | None = None) -> None:
        self._map: dict[str, str] | None = dict(namespace_map) if namespace_map is not None else None

    def get_namespace_uri(self, prefix: str) -> str | None:
        if self._map is None:
            return None
        return self._map.get(prefix)

    def get_prefix(self, uri: str) -> str | None:
        """Return the first prefix mapped to ``uri`` or ``None``."""
        if self._map is None:
            return None
        for key, value in self._map.items():
            if value == uri:
                return key
        return None

    def get_prefixes(self, uri: str) -> Iterator[str]:
        # Listing every prefix for a URI is not supported.
        return iter(())

    def xpath_namespaces(self) -> dict[str, str]:
        """Mapping in the form lxml accepts for XPath evaluation.

        lxml refuses an empty prefix, so a default-namespace entry is left out.
        """
        if not self._map:
            return {}
        return {prefix: uri for prefix, uri in self._map.items() if prefix and uri is not None}

    def __repr__(self) -> str:
        return f"NamespaceContext({self._map!r})"


__all__ = ["CSW_NS", "OGC_NS", "NamespaceContext"]

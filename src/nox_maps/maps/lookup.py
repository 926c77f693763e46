"""Long zone name to map file code lookup.

The log reports zones by their long name ("Greater Faydark") while map
files are named by a short code ("gfaydark"). The table is loaded once
from either a JSON object or an ini-style file::

    [Zones]
    # Long Name = code
    Greater Faydark = gfaydark
    North Qeynos = qeynos2
"""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from pathlib import Path

from nox_maps.core.exceptions import ZoneLookupError
from nox_maps.core.logging import get_logger


logger = get_logger(__name__)

_COMMENT_PREFIXES = ("#", ";")


def normalize_zone_name(name: str) -> str:
    """Normalise a long zone name for case-insensitive comparison."""
    return name.strip().casefold()


def parse_ini_lookup(text: str) -> dict[str, str]:
    """Parse ``Long Name = code`` lines.

    Blank lines, ``#``/``;`` comments, ``[section]`` headers and lines
    without ``=`` are skipped. Later entries override earlier ones.
    """
    mapping: dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if not line or line.startswith(_COMMENT_PREFIXES) or line.startswith("["):
            continue
        long_name, sep, code = line.partition("=")
        if not sep:
            continue
        mapping[long_name.strip()] = code.strip()
    return mapping


class ZoneLookup(Mapping[str, str]):
    """Read-only, case-insensitive mapping of long zone names to file codes.

    Example:
        >>> lookup = ZoneLookup({"Greater Faydark": "gfaydark"})
        >>> lookup.resolve("greater faydark")
        'gfaydark'
        >>> lookup.resolve_or_default("The Nexus")
        'The Nexus'
    """

    def __init__(self, mapping: Mapping[str, str] | None = None) -> None:
        self._codes: dict[str, str] = {}
        for long_name, code in (mapping or {}).items():
            key = normalize_zone_name(long_name)
            if key and code.strip():
                self._codes[key] = code.strip()

    @classmethod
    def from_file(cls, path: Path | str) -> ZoneLookup:
        """Load a lookup table from a ``.json`` or ini-style file.

        Raises:
            ZoneLookupError: If the file is missing, unreadable, or malformed.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8-sig")
        except OSError as exc:
            raise ZoneLookupError(
                f"Could not read zone lookup file: {exc}",
                source_file=str(path),
            ) from exc

        if path.suffix.lower() == ".json":
            try:
                data = json.loads(text)
            except json.JSONDecodeError as exc:
                raise ZoneLookupError(
                    f"Invalid JSON in zone lookup file: {exc.msg}",
                    source_file=str(path),
                    details={"line": exc.lineno},
                ) from exc
            if not isinstance(data, dict) or not all(
                isinstance(value, str) for value in data.values()
            ):
                raise ZoneLookupError(
                    "Zone lookup JSON must be an object of name to code strings",
                    source_file=str(path),
                )
            mapping = data
        else:
            mapping = parse_ini_lookup(text)

        lookup = cls(mapping)
        logger.info("Loaded zone lookup", path=path.name, zones=len(lookup))
        return lookup

    def resolve(self, long_name: str) -> str | None:
        """Return the file code for a zone, or None when unknown."""
        return self._codes.get(normalize_zone_name(long_name))

    def resolve_or_default(self, long_name: str) -> str:
        """Return the file code, falling back to the long name itself."""
        code = self.resolve(long_name)
        return code if code is not None else long_name

    def codes(self) -> set[str]:
        """All known file codes, lower-cased."""
        return {code.lower() for code in self._codes.values()}

    def __getitem__(self, long_name: str) -> str:
        return self._codes[normalize_zone_name(long_name)]

    def __contains__(self, long_name: object) -> bool:
        return isinstance(long_name, str) and normalize_zone_name(long_name) in self._codes

    def __iter__(self) -> Iterator[str]:
        return iter(self._codes)

    def __len__(self) -> int:
        return len(self._codes)


__all__ = [
    "ZoneLookup",
    "normalize_zone_name",
    "parse_ini_lookup",
]

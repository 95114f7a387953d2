"""Mutable store of named scalars and named numeric maps."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from .errors import AssignToMapNameError, MapNotFoundError
from .numeric import NAN
from .values import validate_number

logger = logging.getLogger(__name__)


class EvaluationContext:
    """Scalars and maps share one name space; a name means one or the other.

    Reads of absent scalars or absent map entries give NaN. Writes take effect
    immediately and are visible to every later read against this context.
    """

    def __init__(
        self,
        scalars: Mapping[str, object] | None = None,
        maps: Mapping[str, Mapping[object, object]] | None = None,
    ) -> None:
        self.scalars: dict[str, float] = {}
        self.maps: dict[str, dict[float, float]] = {}

        for name, entries in (maps or {}).items():
            self.maps[name] = {
                validate_number(index, where=f"maps[{name!r}] index"): validate_number(
                    value, where=f"maps[{name!r}][{index!r}]"
                )
                for index, value in entries.items()
            }
        for name, value in (scalars or {}).items():
            if name in self.maps:
                raise AssignToMapNameError(name)
            self.scalars[name] = validate_number(value, where=f"scalars[{name!r}]")

    def declare_map(self, name: str) -> None:
        if name in self.scalars:
            logger.debug("map %r replaces scalar binding", name)
            del self.scalars[name]
        if name in self.maps:
            logger.debug("map %r redeclared; entries reset", name)
        self.maps[name] = {}

    def has_map(self, name: str) -> bool:
        return name in self.maps

    def read_scalar(self, name: str) -> float:
        return self.scalars.get(name, NAN)

    def write_scalar(self, name: str, value: float) -> None:
        if name in self.maps:
            raise AssignToMapNameError(name)
        self.scalars[name] = value

    def _map(self, name: str) -> dict[float, float]:
        try:
            return self.maps[name]
        except KeyError:
            raise MapNotFoundError(name) from None

    def read_map_entry(self, name: str, index: float) -> float:
        return self._map(name).get(index, NAN)

    def write_map_entry(self, name: str, index: float, value: float) -> None:
        self._map(name)[index] = value

    def snapshot(self) -> dict[str, object]:
        return {
            "scalars": dict(self.scalars),
            "maps": {name: dict(entries) for name, entries in self.maps.items()},
        }

    def __repr__(self) -> str:
        return f"EvaluationContext(scalars={self.scalars!r}, maps={self.maps!r})"

"""
litcal.core.registry
--------------------
Named calendar sources, their parsed definitions and a small cache of
generated years.

A source is a base TOML file plus optional extension files whose feasts are
merged over it. Definitions are parsed on first use; generated years are kept
in an LRU cache keyed by (calendar name, liturgical year).
"""

from __future__ import annotations

import importlib
import importlib.resources
from collections import OrderedDict
from dataclasses import dataclass, field
from pathlib import Path
from threading import Lock
from typing import Any, Dict, List, Optional, Tuple

from loguru import logger

from litcal.calendar.definition import CalendarDefinition
from litcal.calendar.year import YearCalendar
from litcal.core.errors import UnknownCalendarError

PACKAGED_DATA = "litcal.data"


@dataclass(frozen=True)
class CalendarSource:
    """Where a calendar comes from: a base file and extension files.

    Plain file names are looked up in `data_dir` first and then in the
    packaged data; paths with a directory part are used as given.
    """
    base: str
    extensions: Tuple[str, ...] = ()
    data_dir: Optional[str] = None

    def _read(self, filename: str) -> str:
        p = Path(filename)
        if p.parent != Path("."):
            return p.read_text(encoding="utf-8")
        if self.data_dir:
            candidate = Path(self.data_dir).expanduser() / filename
            if candidate.is_file():
                return candidate.read_text(encoding="utf-8")
        pkg = importlib.import_module(PACKAGED_DATA)
        return importlib.resources.files(pkg).joinpath(filename).read_text(encoding="utf-8")

    def load(self) -> CalendarDefinition:
        try:
            cal = CalendarDefinition.from_toml_str(self._read(self.base))
            for ext in self.extensions:
                cal.merge_feasts(CalendarDefinition.from_toml_str(self._read(ext)))
        except FileNotFoundError as e:
            raise UnknownCalendarError(f"Calendar file not found: {e.filename or self.base}") from e
        return cal


@dataclass
class CalendarRegistry:
    _sources: Dict[str, CalendarSource] = field(default_factory=dict)
    cache_size: int = 32
    _definitions: Dict[str, CalendarDefinition] = field(default_factory=dict, repr=False)
    _years: "OrderedDict[Tuple[str, int], YearCalendar]" = field(default_factory=OrderedDict, repr=False)
    _lock: Lock = field(default_factory=Lock, repr=False)

    def list(self) -> List[str]:
        return sorted(self._sources.keys())

    def register(self, name: str, source: CalendarSource, *, overwrite: bool = False) -> None:
        if (not overwrite) and (name in self._sources):
            raise KeyError(f"Calendar '{name}' already exists. Use overwrite=True to replace.")
        with self._lock:
            self._sources[name] = source
            self._definitions.pop(name, None)
            for key in [k for k in self._years if k[0] == name]:
                del self._years[key]

    def register_definition(self, name: str, definition: CalendarDefinition, *, overwrite: bool = False) -> None:
        """Register an already-built definition (no backing file)."""
        self.register(name, CalendarSource(base=f"<{name}>"), overwrite=overwrite)
        self._definitions[name] = definition

    def get(self, name: str) -> CalendarDefinition:
        if name not in self._sources:
            raise UnknownCalendarError(f"Calendar '{name}' not found")
        with self._lock:
            cal = self._definitions.get(name)
            if cal is None:
                logger.debug(f"Loading calendar '{name}'")
                cal = self._sources[name].load()
                self._definitions[name] = cal
            return cal

    def info(self, name: str) -> Dict[str, Any]:
        cal = self.get(name)
        return {
            "name": name,
            "display_name": cal.name,
            "description": f"Liturgical calendar: {cal.name}",
            "edition": cal.edition,
            "commemoration_interpretation": cal.commemoration_interpretation,
            "seasons": len(cal.seasons),
            "feasts": len(cal.feasts),
        }

    def year(self, name: str, lit_year: int) -> YearCalendar:
        key = (name, lit_year)
        with self._lock:
            hit = self._years.get(key)
            if hit is not None:
                self._years.move_to_end(key)
                return hit
        cal = self.get(name)
        logger.info(f"Generating calendar '{name}' for liturgical year {lit_year}")
        generated = cal.generate(lit_year)
        with self._lock:
            if self.cache_size > 0:
                self._years[key] = generated
                while len(self._years) > self.cache_size:
                    self._years.popitem(last=False)
        return generated

    def clear_cache(self) -> None:
        with self._lock:
            self._years.clear()

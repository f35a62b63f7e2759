from __future__ import annotations

from pathlib import Path
from typing import Dict, Optional

from loguru import logger

from litcal.core.registry import CalendarRegistry, CalendarSource
from litcal.core.settings import settings

BUILTIN_CALENDARS: Dict[str, CalendarSource] = {
    "54": CalendarSource("54.toml"),
    "ef": CalendarSource("ef.toml"),
    "of": CalendarSource("of.toml"),
    "of-us": CalendarSource("of.toml", ("of-us-extensions.toml",)),
}


def build_registry(data_dir: Optional[str] = None, cache_size: Optional[int] = None) -> CalendarRegistry:
    data_dir = data_dir if data_dir is not None else settings.data_dir
    reg = CalendarRegistry(cache_size=settings.cache_size if cache_size is None else cache_size)
    for name, src in BUILTIN_CALENDARS.items():
        reg.register(name, CalendarSource(src.base, src.extensions, data_dir))

    # any other <name>.toml in the data directory becomes calendar <name>
    if data_dir:
        root = Path(data_dir).expanduser()
        if not root.is_dir():
            logger.warning(f"Calendar data directory {root} does not exist")
        else:
            known = {s.base for s in BUILTIN_CALENDARS.values()}
            known |= {e for s in BUILTIN_CALENDARS.values() for e in s.extensions}
            for path in sorted(root.glob("*.toml")):
                if path.name in known or path.stem in BUILTIN_CALENDARS:
                    continue
                reg.register(path.stem, CalendarSource(str(path)))
                logger.debug(f"Registered calendar '{path.stem}' from {path}")
    return reg

# src/pathviz/app/settings.py
#!/usr/bin/env python3
"""
Viewer configuration.

Every setting comes from an environment variable and can be overridden on the
command line with ``--key=value``:

    PATHVIZ_SIZE        --size=        grid side, clamped to [MIN_SIZE, MAX_SIZE]
    PATHVIZ_STEP_DELAY  --step-delay=  ms between visit frames
    PATHVIZ_PATH_DELAY  --path-delay=  ms between path frames
    PATHVIZ_MAP         --map=         board file to open at startup
    PATHVIZ_LOG_LEVEL   --log-level=   logging level name
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, Sequence

from pathviz.core.grid import MAX_SIZE, MIN_SIZE, clamp_size  # noqa: F401

DEFAULT_SIZE = 20
STEP_DELAY_MS = 22
PATH_DELAY_MS = 28

MAP_DIR = Path(__file__).resolve().parents[1] / "maps"


@dataclass(frozen=True)
class Settings:
    size: int = DEFAULT_SIZE
    step_delay_ms: int = STEP_DELAY_MS
    path_delay_ms: int = PATH_DELAY_MS
    map_path: Optional[Path] = None
    log_level: str = "WARNING"


def _int_or(raw: Optional[str], default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def resolve_settings(argv: Optional[Sequence[str]] = None,
                     env: Optional[Mapping[str, str]] = None) -> Settings:
    env = os.environ if env is None else env
    raw = {
        "size": env.get("PATHVIZ_SIZE"),
        "step-delay": env.get("PATHVIZ_STEP_DELAY"),
        "path-delay": env.get("PATHVIZ_PATH_DELAY"),
        "map": env.get("PATHVIZ_MAP"),
        "log-level": env.get("PATHVIZ_LOG_LEVEL"),
    }
    for arg in argv or ():
        if arg.startswith("--") and "=" in arg:
            key, value = arg[2:].split("=", 1)
            if key in raw:
                raw[key] = value

    return Settings(
        size=clamp_size(_int_or(raw["size"], DEFAULT_SIZE)),
        step_delay_ms=max(0, _int_or(raw["step-delay"], STEP_DELAY_MS)),
        path_delay_ms=max(0, _int_or(raw["path-delay"], PATH_DELAY_MS)),
        map_path=Path(raw["map"]) if raw["map"] else None,
        log_level=(raw["log-level"] or "WARNING").upper(),
    )

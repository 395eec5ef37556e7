#!/usr/bin/env python3
"""
Sequencer tunables.

Resolution order: dataclass defaults < environment (PATHREVEAL_*) < command
line flags (--search-ms=120, --debug, ...).
"""

import os
import sys
from dataclasses import dataclass, replace
from typing import Dict, Mapping, Optional, Sequence

SEARCH_DELAY_MS = 250
PATH_DELAY_MS   = 100
PAUSE_MS        = 2000
WIPE_MS         = 800
RETRY_DELAY_MS  = 500
OBSTACLE_DENSITY = 0.35
PLACEMENT_ATTEMPTS = 1000


@dataclass(frozen=True)
class SequencerConfig:
    search_delay_ms: float = SEARCH_DELAY_MS
    path_delay_ms: float = PATH_DELAY_MS
    pause_ms: float = PAUSE_MS
    wipe_ms: float = WIPE_MS
    retry_delay_ms: float = RETRY_DELAY_MS
    density: float = OBSTACLE_DENSITY
    block_count: int = 0
    block_size: int = 2
    attempts: int = PLACEMENT_ATTEMPTS
    seed: Optional[int] = None
    debug: bool = False

    def __post_init__(self):
        for name in ("search_delay_ms", "path_delay_ms", "pause_ms", "wipe_ms", "retry_delay_ms"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)!r}")
        if not 0.0 <= self.density < 1.0:
            raise ValueError(f"density must be in [0, 1), got {self.density!r}")
        if self.attempts <= 0:
            raise ValueError(f"attempts must be positive, got {self.attempts!r}")
        if self.block_count < 0 or self.block_size <= 0:
            raise ValueError("block_count must be >= 0 and block_size > 0")


DEFAULT_CONFIG = SequencerConfig()

# option name -> (env var, flag)
_OPTIONS: Dict[str, tuple] = {
    "search_delay_ms": ("PATHREVEAL_SEARCH_MS", "--search-ms"),
    "path_delay_ms":   ("PATHREVEAL_PATH_MS",   "--path-ms"),
    "pause_ms":        ("PATHREVEAL_PAUSE_MS",  "--pause-ms"),
    "wipe_ms":         ("PATHREVEAL_WIPE_MS",   "--wipe-ms"),
    "retry_delay_ms":  ("PATHREVEAL_RETRY_MS",  "--retry-ms"),
    "density":         ("PATHREVEAL_DENSITY",   "--density"),
    "block_count":     ("PATHREVEAL_BLOCKS",    "--blocks"),
    "seed":            ("PATHREVEAL_SEED",      "--seed"),
    "debug":           ("PATHREVEAL_DEBUG",     "--debug"),
}

_TRUE = ("1", "true", "yes", "on")


def _convert(name: str, raw: str, source: str):
    if name == "debug":
        return raw.strip().lower() in _TRUE
    try:
        if name in ("block_count", "seed"):
            return int(raw)
        return float(raw)
    except ValueError:
        raise ValueError(f"{source}: expected a number for {name}, got {raw!r}") from None


def resolve_config(argv: Optional[Sequence[str]] = None,
                   environ: Optional[Mapping[str, str]] = None,
                   base: SequencerConfig = DEFAULT_CONFIG) -> SequencerConfig:
    argv = sys.argv[1:] if argv is None else argv
    environ = os.environ if environ is None else environ

    values = {}
    for name, (env, _flag) in _OPTIONS.items():
        if env in environ:
            values[name] = _convert(name, environ[env], env)

    for arg in argv:
        for name, (_env, flag) in _OPTIONS.items():
            if arg == flag and name == "debug":
                values[name] = True
            elif arg.startswith(flag + "="):
                values[name] = _convert(name, arg.split("=", 1)[1], flag)

    return replace(base, **values)

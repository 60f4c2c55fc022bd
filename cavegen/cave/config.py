"""Generation parameters and their validation.

``GenerationConfig`` is the single input contract of the cave pipeline. It is
a plain value: build one, call :meth:`GenerationConfig.validate` (the pipeline
does this for you) and hand it to :class:`cavegen.cave.pipeline.Cave`.
"""

from __future__ import annotations

import random
from dataclasses import asdict, dataclass, fields, replace
from typing import Any, Dict, Mapping, Optional

# Fresh seeds are drawn from [0, SEED_RANGE) when the caller asks for one.
SEED_RANGE = 99999

LIMITS = {
    "fill_percent": (0, 100),
    "birth_limit": (0, 8),
    "death_limit": (0, 8),
}

# Accept the camelCase spellings used by JSON clients alongside snake_case.
_ALIASES = {
    "fillPercent": "fill_percent",
    "birthLimit": "birth_limit",
    "deathLimit": "death_limit",
    "minCaveSize": "min_cave_size",
    "useRandomSeed": "use_random_seed",
}


class ConfigError(ValueError):
    """Invalid generation parameter. ``field`` names the offending setting."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


@dataclass(frozen=True)
class GenerationConfig:
    width: int = 200
    height: int = 120
    fill_percent: int = 45
    birth_limit: int = 4
    death_limit: int = 3
    steps: int = 5
    min_cave_size: int = 50
    seed: Optional[int] = None
    use_random_seed: bool = False

    def validate(self) -> "GenerationConfig":
        """Raise :class:`ConfigError` for the first out-of-range field, else return self."""
        for name in ("width", "height", "fill_percent", "birth_limit", "death_limit", "steps", "min_cave_size"):
            _require_int(name, getattr(self, name))
        if self.width <= 0:
            raise ConfigError("width", f"must be > 0 (got {self.width})")
        if self.height <= 0:
            raise ConfigError("height", f"must be > 0 (got {self.height})")
        for name, (lo, hi) in LIMITS.items():
            value = getattr(self, name)
            if not lo <= value <= hi:
                raise ConfigError(name, f"must be within [{lo}, {hi}] (got {value})")
        if self.steps < 0:
            raise ConfigError("steps", f"must be >= 0 (got {self.steps})")
        if self.min_cave_size < 1:
            raise ConfigError("min_cave_size", f"must be >= 1 (got {self.min_cave_size})")
        if self.seed is not None:
            _require_int("seed", self.seed)
        if not isinstance(self.use_random_seed, bool):
            raise ConfigError("use_random_seed", "must be a boolean")
        return self

    @property
    def needs_seed(self) -> bool:
        return self.use_random_seed or self.seed is None

    def resolve_seed(self, rng=None) -> "GenerationConfig":
        """Return a copy carrying a concrete seed.

        A fresh seed is drawn when ``use_random_seed`` is set or no seed was
        given. The returned config always has ``use_random_seed=False`` so it
        reproduces the same map when run again.
        """
        if not self.needs_seed:
            return self
        if rng is None:
            rng = random
        return replace(self, seed=rng.randrange(SEED_RANGE), use_random_seed=False)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: Optional["GenerationConfig"] = None) -> "GenerationConfig":
        """Build a config from loosely typed input (JSON body, query string, CLI).

        Unknown keys are ignored. Numeric strings are accepted for integer
        fields. The result is not validated; call :meth:`validate`.
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, raw in data.items():
            name = _ALIASES.get(key, key)
            if name not in known or (raw is None and name != "seed"):
                continue
            if name == "use_random_seed":
                values[name] = _parse_bool(name, raw)
            elif name == "seed":
                values[name] = None if raw in (None, "") else _parse_int(name, raw)
            else:
                values[name] = _parse_int(name, raw)
        return replace(base or cls(), **values)


def _require_int(name: str, value: Any) -> None:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError(name, f"must be an integer (got {value!r})")


def _parse_int(name: str, raw: Any) -> int:
    if isinstance(raw, bool):
        raise ConfigError(name, f"must be an integer (got {raw!r})")
    if isinstance(raw, int):
        return raw
    if isinstance(raw, str):
        s = raw.strip()
        try:
            return int(s)
        except ValueError:
            pass
    raise ConfigError(name, f"must be an integer (got {raw!r})")


def _parse_bool(name: str, raw: Any) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        s = raw.strip().lower()
        if s in {"1", "true", "yes", "on"}:
            return True
        if s in {"0", "false", "no", "off", ""}:
            return False
    if isinstance(raw, int) and raw in (0, 1):
        return bool(raw)
    raise ConfigError(name, f"must be a boolean (got {raw!r})")


__all__ = ["GenerationConfig", "ConfigError", "LIMITS", "SEED_RANGE"]

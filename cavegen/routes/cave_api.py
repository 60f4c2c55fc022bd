"""
project: cavegen
module: cave_api.py
License: MIT

Cave generation API routes.

Every endpoint accepts the same parameter set (JSON body for POST, query
string for GET): any ``GenerationConfig`` field in snake_case or camelCase,
``seed`` as an int or an arbitrary string (hashed deterministically), and for
``/api/cave/generate`` an optional ``encoding`` of ``rows`` (default) or
``rle``. Invalid parameters produce ``400 {"error": ..., "field": ...}``.
"""

import hashlib
import threading

from flask import Blueprint, current_app, jsonify, request

from cavegen.cave import Cave, ConfigError, GenerationConfig, RandomSource
from cavegen.cave.config import LIMITS
from cavegen.services import spawn_service
from cavegen.utils.tile_compress import compress_tiles

bp_cave = Blueprint("cave_api", __name__)

SEED_MAX = 2**63 - 1
ENCODINGS = ("rows", "rle")


def _coerce_seed(payload_seed):
    """Convert provided seed (int or str) into a bounded non-negative int.

    ``None`` and blank strings mean "draw a fresh seed" and come back as None.
    Non-numeric strings are hashed so the same phrase always gives the same cave.
    """
    if payload_seed is None:
        return None
    if isinstance(payload_seed, bool):
        raise ConfigError("seed", f"must be an integer or string (got {payload_seed!r})")
    if isinstance(payload_seed, int):
        return payload_seed % SEED_MAX
    if isinstance(payload_seed, str):
        s = payload_seed.strip()
        if not s:
            return None
        if s.isdigit():
            return int(s) % SEED_MAX
        h = hashlib.sha256(s.encode("utf-8")).digest()
        return int.from_bytes(h[:8], "big") % SEED_MAX
    raise ConfigError("seed", f"must be an integer or string (got {payload_seed!r})")


def _request_params() -> dict:
    if request.method == "POST":
        data = request.get_json(silent=True)
        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigError("body", "expected a JSON object")
        return dict(data)
    return request.args.to_dict()


def _config_from_params(params: dict) -> GenerationConfig:
    params = dict(params)
    raw_seed = params.pop("seed", None)
    params["seed"] = _coerce_seed(raw_seed)
    cfg = GenerationConfig.from_mapping(params).validate()
    max_dim = current_app.config.get("CAVEGEN_MAX_DIMENSION", 512)
    for name in ("width", "height"):
        if getattr(cfg, name) > max_dim:
            raise ConfigError(name, f"must be <= {max_dim} (got {getattr(cfg, name)})")
    return cfg.resolve_seed()


# Simple in-process cache (config, metrics flag) -> Cave. Generation is
# synchronous, but the dev server may run requests on several threads.
_cave_cache = {}
_cave_cache_lock = threading.Lock()
_CAVE_CACHE_MAX = 8


def get_cached_cave(config: GenerationConfig, enable_metrics: bool = True) -> Cave:
    config = config.resolve_seed()
    if current_app.config.get("CAVEGEN_DISABLE_CACHE"):
        return Cave(config, enable_metrics=enable_metrics)
    key = (config, enable_metrics)
    with _cave_cache_lock:
        cave = _cave_cache.get(key)
        if cave is not None:
            return cave
    cave = Cave(config, enable_metrics=enable_metrics)
    with _cave_cache_lock:
        _cave_cache[key] = cave
        if len(_cave_cache) > _CAVE_CACHE_MAX:
            first_key = next(iter(_cave_cache.keys()))
            if first_key != key:
                _cave_cache.pop(first_key, None)
    return cave


def clear_cache():
    with _cave_cache_lock:
        _cave_cache.clear()


@bp_cave.errorhandler(ConfigError)
def _config_error(err: ConfigError):
    return jsonify({"error": str(err), "field": err.field}), 400


@bp_cave.route("/api/cave/defaults")
def cave_defaults():
    """
    Return the default generation parameters and their allowed ranges.
    Response: { 'config': {...}, 'limits': {'fill_percent': [0, 100], ...}, 'max_dimension': int }
    """
    limits = {name: list(bounds) for name, bounds in LIMITS.items()}
    limits["steps"] = [0, None]
    limits["min_cave_size"] = [1, None]
    return jsonify(
        {
            "config": GenerationConfig().to_dict(),
            "limits": limits,
            "max_dimension": current_app.config.get("CAVEGEN_MAX_DIMENSION", 512),
        }
    )


@bp_cave.route("/api/cave/generate", methods=["POST"])
def cave_generate():
    """Generate (or fetch from cache) a cave map.

    Response: { seed, config, width, height, encoding, rows | tiles, metrics? }
    ``rows`` is a list of strings, one char per tile ('W' / 'F'), row y=0 first.
    ``tiles`` is the run-length encoded row-major tile string.
    """
    params = _request_params()
    encoding = str(params.pop("encoding", "rows") or "rows").lower()
    if encoding not in ENCODINGS:
        raise ConfigError("encoding", f"must be one of {', '.join(ENCODINGS)}")
    cfg = _config_from_params(params)
    metrics_on = bool(current_app.config.get("CAVEGEN_ENABLE_GENERATION_METRICS", True))
    cave = get_cached_cave(cfg, enable_metrics=metrics_on)
    body = {
        "seed": cave.seed,
        "config": cave.config.to_dict(),
        "width": cave.map.width,
        "height": cave.map.height,
        "encoding": encoding,
    }
    if encoding == "rle":
        body["tiles"] = compress_tiles(cave.map.tile_string())
    else:
        body["rows"] = cave.map.rows()
    if metrics_on:
        body["metrics"] = cave.metrics
    return jsonify(body)


@bp_cave.route("/api/cave/spawn", methods=["POST"])
def cave_spawn():
    """Pick a spawn cell on the cave described by the request parameters.

    The draw is seeded from the map seed, so a given cave always yields the
    same spawn point. Response: { seed, position: [x, y], is_floor: bool }
    """
    cfg = _config_from_params(_request_params())
    cave = get_cached_cave(cfg, enable_metrics=False)
    x, y = spawn_service.random_floor_position(cave.map, RandomSource(cave.seed))
    return jsonify({"seed": cave.seed, "position": [x, y], "is_floor": cave.map.is_floor(x, y)})


@bp_cave.route("/api/cave/metrics", methods=["GET"])
def cave_generation_metrics():
    """Return generation metrics for the cave described by the query string.

    Response: { seed, config, metrics: {...}, flags: { enable_metrics: bool } }
    If metrics are disabled, returns an empty metrics object.
    """
    cfg = _config_from_params(_request_params())
    metrics_on = bool(current_app.config.get("CAVEGEN_ENABLE_GENERATION_METRICS", True))
    cave = get_cached_cave(cfg, enable_metrics=metrics_on)
    return jsonify(
        {
            "seed": cave.seed,
            "config": cave.config.to_dict(),
            "metrics": cave.metrics if metrics_on else {},
            "flags": {"enable_metrics": metrics_on},
        }
    )

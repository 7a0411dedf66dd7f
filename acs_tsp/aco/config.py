import yaml
from pathlib import Path

from acs_tsp.aco.errors import ConfigError

DEFAULT_CONFIG = Path(__file__).resolve().parent.parent / "configs" / "default.yaml"


def load_config(path=None):
    with open(Path(path) if path else DEFAULT_CONFIG, "r") as f:
        cfg = yaml.safe_load(f) or {}
    validate_config(cfg)
    return cfg


def validate_config(cfg):
    """Check hyper-parameter ranges; raises ConfigError on the first bad value."""
    for key in ("num_ants", "alpha", "rho", "beta", "q0", "time_limit"):
        if key not in cfg or cfg[key] is None:
            raise ConfigError(f"missing config value: {key}")

    if int(cfg["num_ants"]) < 1:
        raise ConfigError(f"num_ants must be >= 1, got {cfg['num_ants']}")
    for key in ("alpha", "rho", "q0"):
        if not 0.0 <= float(cfg[key]) <= 1.0:
            raise ConfigError(f"{key} must lie in [0, 1], got {cfg[key]}")
    if float(cfg["beta"]) < 0:
        raise ConfigError(f"beta must be >= 0, got {cfg['beta']}")
    if float(cfg["time_limit"]) <= 0:
        raise ConfigError(f"time_limit must be > 0, got {cfg['time_limit']}")
    return cfg

import logging
import os
from dataclasses import dataclass, fields, replace

from .types import *
from .schedulers import ThreadingScheduler

logger = logging.getLogger(__name__)


@dataclass
class UnderbarConfig:
    """package-wide defaults"""
    seed: Optional[int] = None  # default seed for shuffle()
    scheduler: Optional[Scheduler] = None  # default for delay() and throttle()
    log_level: Optional[str] = None

    def __post_init__(self):
        if self.scheduler is None:
            self.scheduler = ThreadingScheduler()

    @classmethod
    def from_env(cls) -> 'UnderbarConfig':
        """build a config from UNDERBAR_SEED and UNDERBAR_LOG_LEVEL"""
        seed = os.environ.get('UNDERBAR_SEED')
        try:
            parsed_seed = int(seed) if seed not in (None, '') else None
        except ValueError:
            raise ValueError(f"UNDERBAR_SEED must be an integer, got {seed!r}") from None
        return cls(seed=parsed_seed, log_level=os.environ.get('UNDERBAR_LOG_LEVEL') or None)


_config = UnderbarConfig()


def _apply_log_level(config: UnderbarConfig) -> None:
    package_logger = logging.getLogger('underbar')
    if config.log_level:
        package_logger.setLevel(config.log_level.upper())
    else:
        # hand level decisions back to the root logger
        package_logger.setLevel(logging.NOTSET)


def get_config() -> UnderbarConfig:
    return _config


def configure(**overrides: Any) -> UnderbarConfig:
    """replace selected settings, e.g. configure(seed=7, scheduler=VirtualScheduler())"""
    global _config
    known = {f.name for f in fields(UnderbarConfig)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"unknown config option(s): {', '.join(sorted(unknown))}")
    _config = replace(_config, **overrides)
    if 'log_level' in overrides:
        _apply_log_level(_config)
    logger.debug(f"config updated: {sorted(overrides)}")
    return _config


def reset_config() -> UnderbarConfig:
    """restore the defaults"""
    global _config
    _config = UnderbarConfig()
    _apply_log_level(_config)
    return _config

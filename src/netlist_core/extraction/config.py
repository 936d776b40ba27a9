# src/netlist_core/extraction/config.py
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional

import pint

from ..constants import (
    DEFAULT_COINCIDENCE_TOLERANCE, DEFAULT_OVERFLOW_POLICY, MAX_CONFIGURATIONS, OVERFLOW_POLICIES
)
from ..units import DEFAULT_LAYOUT_UNIT, to_layout_length

logger = logging.getLogger(__name__)


class ConfigParsingError(ValueError):
    """Custom exception for errors during extraction configuration parsing."""
    pass


@dataclass(frozen=True)
class ExtractionConfig:
    """
    Tunables for one extraction call. Lengths are in layout units.

    Attributes:
        tolerance: Coincidence tolerance on each axis.
        snap_grid: If set, positions are snapped to this grid before matching.
        max_configurations: Upper bound on the switch configuration space.
        overflow_policy: "error" to raise ConfigurationOverflowError past the
                         bound, "warn" to log a warning and extract anyway.
    """
    tolerance: float = DEFAULT_COINCIDENCE_TOLERANCE
    snap_grid: Optional[float] = None
    max_configurations: int = MAX_CONFIGURATIONS
    overflow_policy: str = DEFAULT_OVERFLOW_POLICY

    def __post_init__(self):
        if not self.tolerance >= 0:
            raise ConfigParsingError(f"Coincidence tolerance must be >= 0, got {self.tolerance}.")
        if self.snap_grid is not None and not self.snap_grid > 0:
            raise ConfigParsingError(f"Snap grid must be > 0, got {self.snap_grid}.")
        if isinstance(self.max_configurations, bool) or not isinstance(self.max_configurations, int) \
                or self.max_configurations < 1:
            raise ConfigParsingError(
                f"max_configurations must be a positive integer, got {self.max_configurations!r}."
            )
        if self.overflow_policy not in OVERFLOW_POLICIES:
            raise ConfigParsingError(
                f"Unknown overflow policy '{self.overflow_policy}'. Must be one of {list(OVERFLOW_POLICIES)}."
            )


def parse_extraction_config(
    raw_config: Optional[Dict[str, Any]], layout_unit: str = DEFAULT_LAYOUT_UNIT
) -> ExtractionConfig:
    """
    Parses the raw `extraction:` block of a layout description into an
    ExtractionConfig. A missing or empty block yields the defaults.
    """
    if not raw_config:
        return ExtractionConfig()
    try:
        kwargs: Dict[str, Any] = {}
        if 'tolerance' in raw_config:
            kwargs['tolerance'] = to_layout_length(raw_config['tolerance'], layout_unit)
        if raw_config.get('snap_grid') is not None:
            kwargs['snap_grid'] = to_layout_length(raw_config['snap_grid'], layout_unit)
        if 'max_configurations' in raw_config:
            kwargs['max_configurations'] = int(raw_config['max_configurations'])
        if 'overflow_policy' in raw_config:
            kwargs['overflow_policy'] = str(raw_config['overflow_policy'])
        config = ExtractionConfig(**kwargs)
        logger.debug(f"Parsed extraction config: {config}")
        return config
    except ConfigParsingError:
        raise
    except (TypeError, ValueError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse extraction configuration: {e}") from e

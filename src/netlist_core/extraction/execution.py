# src/netlist_core/extraction/execution.py
"""
Provides the primary public API functions for extracting netlists.

This module is a thin Facade over the `NetlistExtractor`: callers hand it
components (or a layout description file) and get back the list of Netlists,
without touching the registry, the enumerator or the partition builder.
File-level failures are reported as a single `ExtractionRunError` whose
message is the diagnostic report of the root cause.
"""
import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple, Union

from ..cache import CoincidenceCache
from ..components.base import ComponentBase
from ..errors import DiagnosableError, ExtractionRunError, LayoutBuildError, format_diagnostic_report
from ..layout_builder import LayoutBuilder
from ..parser import LayoutParser
from .config import ExtractionConfig
from .engine import NetlistExtractor
from .results import Netlist

logger = logging.getLogger(__name__)


def extract_netlists(
    components: Sequence[ComponentBase],
    config: Optional[ExtractionConfig] = None,
    cache: Optional[CoincidenceCache] = None,
) -> List[Netlist]:
    """
    Extracts one Netlist per switch configuration from `components`.

    Diagnosable errors (ComponentError, ConfigurationOverflowError,
    LayoutValidationError, ExtractionError) propagate unchanged so that
    callers can recover from the specific one they care about.
    """
    return NetlistExtractor(components, config=config, cache=cache).extract()


def extract_netlists_from_file(
    layout_path: Union[str, Path],
    cache: Optional[CoincidenceCache] = None,
) -> Tuple[List[Netlist], CoincidenceCache]:
    """
    Parses, builds and extracts a layout description file in one call.

    Args:
        layout_path: Path to the YAML layout description.
        cache: An optional `CoincidenceCache` to reuse. If None, a new one is
               created; it is returned so that it can be passed back in.

    Returns:
        A tuple of the netlists and the cache instance used for the run.

    Raises:
        LayoutBuildError: If the description cannot be parsed or built.
        ExtractionRunError: If extraction fails after a successful build.
                            The original exception is chained.
    """
    effective_cache = cache if cache is not None else CoincidenceCache()
    try:
        parsed = LayoutParser().parse(Path(layout_path))
    except DiagnosableError as e:
        raise LayoutBuildError(e.get_diagnostic_report()) from e
    layout = LayoutBuilder().build(parsed)

    try:
        logger.info(f"--- Starting netlist extraction for '{layout.name}' ---")
        netlists = NetlistExtractor(layout.components, config=layout.extraction_config, cache=effective_cache).extract()
        logger.info(f"Extraction successful. Cache stats: {effective_cache.get_stats()}")
        return netlists, effective_cache

    except DiagnosableError as e:
        logger.error(f"A diagnosable error occurred during extraction: {e}")
        raise ExtractionRunError(e.get_diagnostic_report()) from e

    except Exception as e:
        logger.critical(f"An unexpected internal error occurred during extraction: {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Extraction Error Occurred ({type(e).__name__})",
            details=f"The extractor encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={'source_file': layout.source_file_path}
        )
        raise ExtractionRunError(report) from e

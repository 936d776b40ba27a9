# src/netlist_core/extraction/engine.py
"""
Defines the `NetlistExtractor`, the service that orchestrates one extraction call:

    Registry -> Coincidence -> Continuity -> Enumerate -> [Partition -> Assemble]*

Registry and coincidence are geometry-only and run once. The enumerator then
drives the partition builder once per switch configuration; every run reuses
the same base partition and adds its own switch edges.
"""
import logging
from typing import Dict, List, Optional, Sequence

from ..cache import CoincidenceCache, create_coincidence_key
from ..components.base import ComponentBase
from ..data_structures import Edge
from ..errors import DiagnosableError
from ..validation import LayoutValidator, ValidationIssueLevel
from ..validation.exceptions import LayoutValidationError
from .assembler import assemble_netlist
from .coincidence import resolve_coincidence
from .config import ExtractionConfig
from .continuity import collect_continuity
from .exceptions import ExtractionError
from .partition import build_base_partition, build_partition
from .points import PointRegistry, build_point_registry
from .results import Netlist
from .switches import enumerate_configurations

logger = logging.getLogger(__name__)


class NetlistExtractor:
    """
    Extracts one Netlist per reachable switch configuration from an ordered
    collection of components. The extractor keeps no state between calls
    except what the caller-owned `CoincidenceCache` holds.
    """

    def __init__(
        self,
        components: Sequence[ComponentBase],
        config: Optional[ExtractionConfig] = None,
        cache: Optional[CoincidenceCache] = None,
    ):
        """
        Args:
            components: Components in layout order. The order fixes point order,
                        switch order and therefore configuration order.
            config: Tolerances and limits. Defaults to `ExtractionConfig()`.
            cache: Optional cache of coincidence edges keyed on geometry.
        """
        self.components: List[ComponentBase] = list(components)
        self.config: ExtractionConfig = config if config is not None else ExtractionConfig()
        self.cache: Optional[CoincidenceCache] = cache
        logger.debug(f"NetlistExtractor initialized with {len(self.components)} component(s).")

    def extract(self) -> List[Netlist]:
        """
        Runs the full pipeline.

        Returns:
            One Netlist per configuration in lexicographic order, or an empty
            list if there is nothing to extract.

        Raises:
            LayoutValidationError: If the components fail pre-extraction validation.
            ComponentError: For malformed component data.
            ConfigurationOverflowError: If the configuration space is too large
                                        under the "error" overflow policy.
            ExtractionError: For any unexpected failure inside a stage.
        """
        if not self.components:
            logger.info("No components to extract.")
            return []

        issues = LayoutValidator(self.components).validate()
        if any(issue.level == ValidationIssueLevel.ERROR for issue in issues):
            raise LayoutValidationError(issues)

        registry = self._run_stage("point registry", lambda: build_point_registry(self.components))
        if len(registry) == 0:
            logger.info("Components expose no points; nothing to extract.")
            return []

        coincidence_edges = self._run_stage("coincidence", lambda: self._coincidence_edges(registry))
        continuity = self._run_stage("continuity", lambda: collect_continuity(self.components, registry))
        configurations = enumerate_configurations(
            continuity.switches,
            max_configurations=self.config.max_configurations,
            overflow_policy=self.config.overflow_policy,
        )
        base = self._run_stage(
            "base partition",
            lambda: build_base_partition(registry, list(coincidence_edges) + list(continuity.unconditional_edges)),
        )

        components_by_id: Dict[str, ComponentBase] = {c.instance_id: c for c in self.components}
        netlists: List[Netlist] = []
        for configuration in configurations:
            partition = self._run_stage(
                "partition", lambda: build_partition(base, continuity.switches, configuration), configuration
            )
            netlists.append(assemble_netlist(registry, partition, continuity.switches, configuration, components_by_id))

        logger.info(
            f"Extracted {len(netlists)} netlist(s) from {len(self.components)} component(s), "
            f"{len(registry)} point(s), {len(continuity.switches)} switch(es)."
        )
        return netlists

    def _coincidence_edges(self, registry: PointRegistry) -> List[Edge]:
        tolerance, snap_grid = self.config.tolerance, self.config.snap_grid
        if self.cache is None:
            return resolve_coincidence(registry, tolerance, snap_grid)
        key = create_coincidence_key(registry, tolerance, snap_grid)
        cached = self.cache.get(key)
        if cached is not None:
            return list(cached)
        edges = resolve_coincidence(registry, tolerance, snap_grid)
        self.cache.put(key, tuple(edges))
        return edges

    @staticmethod
    def _run_stage(stage: str, action, configuration=None):
        """Runs one stage, passing diagnosable errors through and wrapping anything else."""
        try:
            return action()
        except DiagnosableError:
            raise
        except Exception as e:
            raise ExtractionError(
                stage=stage,
                details=f"{type(e).__name__}: {e}",
                switch_setup=str(configuration) if configuration is not None else "",
            ) from e

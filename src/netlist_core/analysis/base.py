# src/netlist_core/analysis/base.py
"""
The analyzer contract and the runner that isolates analyzers from each other.

An analyzer reads the full list of Netlists from one extraction call and
produces zero or more `Summary` records. Analyzers never modify netlists
(they are frozen) and a failing analyzer never prevents the others from
running.
"""
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Protocol, Sequence, Tuple, runtime_checkable

from ..extraction.results import Netlist
from .exceptions import AnalyzerError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Summary:
    """
    One finding of an analyzer.

    Attributes:
        analyzer_name: Name of the analyzer that produced it.
        title: Short heading, e.g. the switch setup it applies to.
        lines: Human-readable body, one entry per line.
        data: Machine-readable payload for callers that post-process results.
    """
    analyzer_name: str
    title: str
    lines: Tuple[str, ...] = ()
    data: Dict[str, Any] = field(default_factory=dict, compare=False)

    def __str__(self) -> str:
        return "\n".join([f"[{self.analyzer_name}] {self.title}"] + [f"  {line}" for line in self.lines])


@runtime_checkable
class INetlistAnalyzer(Protocol):
    """Contract for pluggable netlist analyzers."""
    name: str

    def summarize(self, netlists: Sequence[Netlist]) -> List[Summary]:
        ...


@dataclass(frozen=True)
class AnalyzerFailure:
    """An analyzer that raised, with the wrapped error."""
    analyzer_name: str
    error: AnalyzerError


@dataclass(frozen=True)
class AnalysisReport:
    summaries: Tuple[Summary, ...]
    failures: Tuple[AnalyzerFailure, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.failures

    def summaries_for(self, analyzer_name: str) -> Tuple[Summary, ...]:
        return tuple(s for s in self.summaries if s.analyzer_name == analyzer_name)


def run_analyzers(netlists: Sequence[Netlist], analyzers: Sequence[INetlistAnalyzer]) -> AnalysisReport:
    """
    Runs every analyzer over the same netlists, in order. An exception from
    one analyzer is logged, wrapped in `AnalyzerError` and recorded as an
    `AnalyzerFailure`; the remaining analyzers still run.
    """
    netlists = tuple(netlists)
    summaries: List[Summary] = []
    failures: List[AnalyzerFailure] = []
    for analyzer in analyzers:
        name = getattr(analyzer, "name", type(analyzer).__name__)
        try:
            produced = list(analyzer.summarize(netlists))
        except Exception as e:
            error = AnalyzerError(analyzer_name=name, details=f"{type(e).__name__}: {e}")
            error.__cause__ = e
            logger.error(f"Analyzer '{name}' failed: {e}", exc_info=True)
            failures.append(AnalyzerFailure(analyzer_name=name, error=error))
            continue
        logger.debug(f"Analyzer '{name}' produced {len(produced)} summary(ies).")
        summaries.extend(produced)
    return AnalysisReport(summaries=tuple(summaries), failures=tuple(failures))

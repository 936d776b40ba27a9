# src/netlist_core/validation/validator.py
import logging
from collections import Counter
from typing import List, Sequence

from ..components.base import ComponentBase
from ..components.capabilities import IContinuityProvider
from ..components.continuity import PositionDependent
from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import LayoutIssueCode

logger = logging.getLogger(__name__)


class LayoutValidator:
    """
    Checks a set of components for problems that extraction would either
    refuse (identity collisions) or silently produce confusing output for
    (ambiguous labels, invisible components, inert switches).

    It reports; it never raises. The caller decides whether ERROR-level issues
    halt extraction.
    """

    def __init__(self, components: Sequence[ComponentBase]):
        self.components: List[ComponentBase] = list(components)
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        """
        Returns every issue found, in a deterministic order: identity issues
        first, then per-component issues in component order.
        """
        self.issues = []
        logger.debug(f"Validating {len(self.components)} component(s)...")
        self._check_duplicate_ids()
        self._check_duplicate_names()
        for component in self.components:
            self._check_component(component)

        if self.issues:
            counts = Counter(issue.level for issue in self.issues)
            logger.info(
                f"Validation complete. Found: {counts[ValidationIssueLevel.ERROR]} errors, "
                f"{counts[ValidationIssueLevel.WARNING]} warnings, {counts[ValidationIssueLevel.INFO]} info messages."
            )
            for issue in self.issues:
                if issue.level == ValidationIssueLevel.WARNING:
                    logger.warning(str(issue))
        else:
            logger.debug("Validation complete with no issues found.")
        return self.issues

    def _add_issue(self, level: ValidationIssueLevel, code_enum: LayoutIssueCode, component_id=None, **kwargs):
        message = code_enum.format_message(component_id=component_id, **kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message, component_id=component_id, details=dict(kwargs)
        ))

    def _check_duplicate_ids(self):
        counts = Counter(c.instance_id for c in self.components)
        for component_id, count in counts.items():
            if count > 1:
                self._add_issue(ValidationIssueLevel.ERROR, LayoutIssueCode.ID_DUPLICATE, component_id, count=count)

    def _check_duplicate_names(self):
        by_name = {}
        for c in self.components:
            by_name.setdefault(c.name, []).append(c.instance_id)
        for name, ids in by_name.items():
            distinct_ids = list(dict.fromkeys(ids))
            if len(distinct_ids) > 1:
                self._add_issue(
                    ValidationIssueLevel.WARNING, LayoutIssueCode.LABEL_DUPLICATE_NAME,
                    name=name, component_ids=distinct_ids,
                )

    def _check_component(self, component: ComponentBase):
        control_points = component.get_control_points()
        if not control_points:
            self._add_issue(ValidationIssueLevel.INFO, LayoutIssueCode.GEOM_NO_POINTS, component.instance_id)
            return

        name_counts = Counter(cp.name for cp in control_points)
        repeated = sorted(name for name, count in name_counts.items() if count > 1)
        if repeated:
            self._add_issue(
                ValidationIssueLevel.WARNING, LayoutIssueCode.LABEL_DUPLICATE_POINT_NAME,
                component.instance_id, point_names=repeated,
            )

        provider = component.get_capability(IContinuityProvider)
        continuity = provider.get_continuity(component) if provider is not None else None
        if isinstance(continuity, PositionDependent) and continuity.position_count == 1:
            self._add_issue(ValidationIssueLevel.INFO, LayoutIssueCode.SWITCH_SINGLE_POSITION, component.instance_id)

# src/netlist_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class LayoutIssueCode(Enum):
    """
    Registry of layout validation issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Identity Issues (ID_...) ---
    ID_DUPLICATE = ("ID_DUPLICATE", "Component id '{component_id}' is used by {count} components; point identities would collide.")

    # --- Labelling Issues (LABEL_...) ---
    LABEL_DUPLICATE_NAME = ("LABEL_DUPLICATE_NAME", "Components {component_ids} share the display name '{name}'; their node labels cannot be told apart.")
    LABEL_DUPLICATE_POINT_NAME = ("LABEL_DUPLICATE_POINT_NAME", "Component '{component_id}' has several points named {point_names}.")

    # --- Geometry Issues (GEOM_...) ---
    GEOM_NO_POINTS = ("GEOM_NO_POINTS", "Component '{component_id}' exposes no control points and will not appear in any netlist.")

    # --- Switch Issues (SWITCH_...) ---
    SWITCH_SINGLE_POSITION = ("SWITCH_SINGLE_POSITION", "Switch '{component_id}' has a single position; it adds no configurations.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        return self.template.format(**kwargs)

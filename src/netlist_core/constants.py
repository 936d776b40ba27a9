# --- src/netlist_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Extraction Limits and Tolerances ---

#: Upper bound on the number of switch configurations extracted in one call.
#: The configuration space is the product of all switch position counts, so a
#: handful of multi-position switches can grow it quickly.
MAX_CONFIGURATIONS: int = 50_000

#: Default coincidence tolerance, in layout units. Geometry is expected to be
#: grid-snapped already; this only absorbs accumulated floating-point drift.
DEFAULT_COINCIDENCE_TOLERANCE: float = 1.0e-6

#: Smallest bucket edge used when quantizing positions for coincidence lookup.
MIN_BUCKET_SIZE: float = 1.0e-9

#: Accepted values for the configuration overflow policy.
OVERFLOW_POLICIES = ("error", "warn")
DEFAULT_OVERFLOW_POLICY: str = "error"

#: Separator between component name and point name in node labels.
NODE_LABEL_SEPARATOR: str = "."

logger.debug("Defined core constants: MAX_CONFIGURATIONS, DEFAULT_COINCIDENCE_TOLERANCE")

"""
Tags for the sampling strategies a password can come from.
"""


class Method:
    """Sampling method identifiers, in fallback order."""

    REJECTION_SAMPLING = "rejection_sampling"
    COMBINATORIAL_SAMPLING = "combinatorial_sampling"
    GUARANTEED_INCLUSION = "guaranteed_inclusion"


METHODS = (
    Method.REJECTION_SAMPLING,
    Method.COMBINATORIAL_SAMPLING,
    Method.GUARANTEED_INCLUSION,
)

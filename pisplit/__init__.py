__all__ = [
    "chudnovsky_pi_decimal_string",
    "compute_pi",
    "PiResult",
    "PrecisionPlan",
    "plan_precision",
    "Triple",
    "SplitStack",
    "binary_split",
    "merge",
    "reduce_ordered",
    "verify_fractional_digits",
]

from .chudnovsky import PiResult, chudnovsky_pi_decimal_string, compute_pi
from .plan import PrecisionPlan, plan_precision
from .reduction import reduce_ordered
from .splitter import SplitStack, Triple, binary_split, merge
from .verify import verify_fractional_digits

"""
floatdiff: floating-point difference metrics and run summaries

Compare expected and actual doubles with IEEE-754 aware metrics (NaN,
signed zero, infinities, cyclic domains, ULPs), and summarize a whole test
run: worst case, failure rate, first sign change and a log10 histogram.
"""

from .metrics import (
    cyclic,
    diff_abs,
    diff_cyclic,
    diff_lesser,
    diff_rel,
    diff_ulps,
    get_metric,
    is_diff_worse,
)
from .core import (
    DiffPartSummary,
    DiffSummary,
    LogHistogram,
    all_ok,
    assert_all,
    format_report,
    log_report,
)
from .api import log_assert_delta
from .exceptions import DiffAssertionError, PreconditionError
from .utils import to_percent, sign_prefix, format_sci

__version__ = "0.1.0"

__all__ = [
    'DiffAssertionError',
    'DiffPartSummary',
    'DiffSummary',
    'LogHistogram',
    'PreconditionError',
    'all_ok',
    'assert_all',
    'cyclic',
    'diff_abs',
    'diff_cyclic',
    'diff_lesser',
    'diff_rel',
    'diff_ulps',
    'format_report',
    'format_sci',
    'get_metric',
    'is_diff_worse',
    'log_assert_delta',
    'log_report',
    'sign_prefix',
    'to_percent',
]

# Configuration and factory modules
from .config import ComparisonConfig
from .factory import build_summaries, create_metric, summaries_from_yaml
__all__.extend(['ComparisonConfig', 'build_summaries', 'create_metric', 'summaries_from_yaml'])

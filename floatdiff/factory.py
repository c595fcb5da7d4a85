"""
Summary factory for creating comparison groups from configuration.

Metric selection goes through the dispatch dictionary in
:mod:`floatdiff.metrics.core`.
"""

from __future__ import annotations

import logging
from typing import List

from .config import ComparisonConfig, MetricConfig
from .core.summary import DiffSummary
from .metrics.core import DiffMetric, get_metric

logger = logging.getLogger(__name__)


def create_metric(config: MetricConfig) -> DiffMetric:
    """
    Create a metric function from configuration.

    Raises
    ------
    PreconditionError
        If the metric kind is unknown or its range arguments do not fit
    """
    return get_metric(config.kind, range_min=config.range_min, range_max=config.range_max)


def build_summaries(config: ComparisonConfig) -> List[DiffSummary]:
    """
    Build the configured group of summaries.

    Logger levels are left untouched; call ``config.logging.apply()`` to
    use the configured level.

    Parameters
    ----------
    config : ComparisonConfig
        Group configuration

    Returns
    -------
    list of DiffSummary
        One empty summary per configured entry, in configuration order
    """
    infos = [
        (s.name, s.tolerance, s.allow_sign, create_metric(s.metric))
        for s in config.summaries
    ]
    summaries = DiffSummary.new_group(config.bucket_count, infos, group=config.group)
    logger.debug(f"Built {len(summaries)} summaries for group {config.group!r}")
    return summaries


def summaries_from_yaml(yaml_path) -> List[DiffSummary]:
    """Load a YAML config and build its summaries."""
    return build_summaries(ComparisonConfig.from_yaml(yaml_path))

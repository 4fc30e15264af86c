"""Analytics subpackage bundling aggregate metrics over scored pools."""

from . import metrics
from .metrics import Metrics, weighted_mean

__all__ = ["Metrics", "metrics", "weighted_mean"]

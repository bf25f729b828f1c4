from .analyze import analyze
from .collector import FindingCollector, aggregate_findings, slugify

__all__ = ["FindingCollector", "aggregate_findings", "analyze", "slugify"]

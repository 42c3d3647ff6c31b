"""Batch runner applying tracking operations to many paths."""

from fimbl.core.batch.models import BatchResult
from fimbl.core.batch.tracker import FimblTracker

__all__ = ["BatchResult", "FimblTracker"]

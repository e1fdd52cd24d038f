"""
Tracked product workflow.
"""

from .service import SORT_FIELDS, TrackerService

__all__ = ['SORT_FIELDS', 'TrackerService']

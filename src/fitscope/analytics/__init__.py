"""Analytics engine for decoded FIT activity files.

Modules:
    hrv      -- RR-interval extraction and time-domain HRV (RMSSD, SDNN, pNN50)
    summary  -- Activity summary with session-then-records fallback
    catalog  -- Populated message groups, labelled for display
    pipeline -- Normalize a decoder bundle and run all of the above
"""

from fitscope.analytics.hrv import (
    extract_rr_intervals,
    analyze_hrv,
    compute_hrv,
    HRVMetrics,
)
from fitscope.analytics.summary import extract_summary, ActivitySummary
from fitscope.analytics.catalog import (
    list_data_types,
    DataTypeDescriptor,
    DATA_TYPE_LABELS,
)
from fitscope.analytics.pipeline import process_messages, FitReport

__all__ = [
    # hrv
    "extract_rr_intervals",
    "analyze_hrv",
    "compute_hrv",
    "HRVMetrics",
    # summary
    "extract_summary",
    "ActivitySummary",
    # catalog
    "list_data_types",
    "DataTypeDescriptor",
    "DATA_TYPE_LABELS",
    # pipeline
    "process_messages",
    "FitReport",
]

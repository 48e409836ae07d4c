"""fitscope — activity summary and HRV analysis for decoded FIT files."""

__version__ = "0.1.0"

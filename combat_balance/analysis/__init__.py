"""Reductions over fight results: summary statistics and balance alerts."""

from combat_balance.analysis.alerts import detect_alerts
from combat_balance.analysis.summary import build_buckets, compute_summary

__all__ = ["build_buckets", "compute_summary", "detect_alerts"]

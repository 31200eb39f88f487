"""Entities produced by discovery and sampling."""

from .sample import SampleResult, SamplingMethod
from .table import TableRef

__all__ = ["SampleResult", "SamplingMethod", "TableRef"]

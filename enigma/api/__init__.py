"""Public query API: builders, export job handle and parameter accumulator."""

from ..core.params import ParameterSet
from .export_job import ExportJob
from .queries import DataQuery, ExportQuery, MetaQuery, StatsQuery

__all__ = [
    "DataQuery",
    "ExportJob",
    "ExportQuery",
    "MetaQuery",
    "ParameterSet",
    "StatsQuery",
]

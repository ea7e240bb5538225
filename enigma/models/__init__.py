"""Response models.

Architecture:
    Pydantic v2 models decoded directly from response bodies with
    ``model_validate_json``. Success envelopes are frozen so a decoded response
    cannot be modified after it leaves the dispatcher.

Model Categories:
    - Metadata: MetaParentNodeResponse, MetaTableNodeResponse
    - Pages: DataResponse, StatsResponse (opaque ``result`` plus typed ``info``)
    - Export: ExportResponse
    - Errors: ErrorEnvelope
"""

from .meta import (
    BoundaryTable,
    ChildNode,
    ChildTable,
    Column,
    Document,
    MetadataEntry,
    MetaParentNodeResponse,
    MetaTableNodeResponse,
    PathLevel,
)
from .pages import (
    DataResponse,
    ErrorEnvelope,
    ExportResponse,
    PageInfo,
    StatsInfo,
    StatsResponse,
)

__all__ = [
    "BoundaryTable",
    "ChildNode",
    "ChildTable",
    "Column",
    "DataResponse",
    "Document",
    "ErrorEnvelope",
    "ExportResponse",
    "MetaParentNodeResponse",
    "MetaTableNodeResponse",
    "MetadataEntry",
    "PageInfo",
    "PathLevel",
    "StatsInfo",
    "StatsResponse",
]

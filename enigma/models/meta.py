"""Metadata response models.

A metadata request against an intermediate catalog node returns its
breadcrumb path, immediate child nodes and child tables. A request against
a leaf table returns its breadcrumb path and column descriptors. Both shapes
mirror the exact field names returned by the service.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


class PathLevel(BaseModel):
    """One breadcrumb entry of a datapath."""

    level: str = ""
    label: str = ""
    description: str = ""

    model_config = _FROZEN


class ChildNode(BaseModel):
    """Immediate child of a parent node."""

    datapath: str = ""
    label: str = ""
    description: str = ""

    model_config = _FROZEN


class ChildTable(BaseModel):
    """Table nested somewhere below a parent node."""

    datapath: str = ""
    label: str = ""
    description: str = ""
    db_boundary_label: str = ""
    db_boundary_tables: str = ""

    model_config = _FROZEN


class ParentNodeResult(BaseModel):
    path: list[PathLevel] = Field(default_factory=list)
    immediate_nodes: list[ChildNode] = Field(default_factory=list)
    children_tables: list[ChildTable] = Field(default_factory=list)

    model_config = _FROZEN


class ParentNodeInfo(BaseModel):
    result_type: str = ""
    children_tables_limit: int = 0
    children_tables_total: int = 0
    current_page: int = 0
    total_pages: int = 0

    model_config = _FROZEN


class MetaParentNodeResponse(BaseModel):
    """Metadata response describing a parent (category) node."""

    data_path: str = ""
    result: ParentNodeResult
    info: ParentNodeInfo = Field(default_factory=ParentNodeInfo)

    model_config = _FROZEN


class Column(BaseModel):
    """Column descriptor of a table node."""

    id: str
    label: str = ""
    description: str = ""
    type: str = ""
    index: int = 0

    model_config = _FROZEN


class BoundaryTable(BaseModel):
    datapath: str = ""
    label: str = ""

    model_config = _FROZEN


class Document(BaseModel):
    url: str = ""
    title: str = ""
    type: str = ""

    model_config = _FROZEN


class MetadataEntry(BaseModel):
    value: str = ""
    label: str = ""

    model_config = _FROZEN


class TableNodeResult(BaseModel):
    path: list[PathLevel] = Field(default_factory=list)
    columns: list[Column] = Field(default_factory=list)
    db_boundary_datapath: str = ""
    db_boundary_label: str = ""
    db_boundary_tables: list[BoundaryTable] = Field(default_factory=list)
    ancestor_datapaths: list[str] = Field(default_factory=list)
    documents: list[Document] = Field(default_factory=list)
    metadata: list[MetadataEntry] = Field(default_factory=list)

    model_config = _FROZEN


class TableNodeInfo(BaseModel):
    result_type: str = ""

    model_config = _FROZEN


class MetaTableNodeResponse(BaseModel):
    """Metadata response describing a table (leaf) node."""

    datapath: str = ""
    result: TableNodeResult
    info: TableNodeInfo = Field(default_factory=TableNodeInfo)

    model_config = _FROZEN

    @property
    def column_ids(self) -> list[str]:
        """Column identifiers in table order."""
        return [c.id for c in sorted(self.result.columns, key=lambda c: c.index)]

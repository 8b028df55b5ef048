"""
Data models for runtime compatibility comparison.

Baseline and target API surfaces are represented as a tagged union of
``LeafNode`` and ``NamespaceNode``; the comparator produces flat
``ComparisonRow`` lists ready for display.
"""

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class Status(str, Enum):
    """Support status of a single API member in a target runtime."""

    SUPPORTED = "supported"
    STUB = "stub"
    MISMATCH = "mismatch"
    UNSUPPORTED = "unsupported"

    @property
    def symbol(self) -> str:
        return STATUS_SYMBOLS[self]

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]

    @property
    def is_present(self) -> bool:
        """Whether the member exists in the target at all.

        Stubs and mismatches count as present for coverage percentages.
        """
        return self is not Status.UNSUPPORTED


STATUS_SYMBOLS: Dict[Status, str] = {
    Status.SUPPORTED: "✅",
    Status.STUB: "🚧",
    Status.MISMATCH: "🩹",
    Status.UNSUPPORTED: "❌",
}

STATUS_LABELS: Dict[Status, str] = {
    Status.SUPPORTED: "supported",
    Status.STUB: "stub (present but not functional)",
    Status.MISMATCH: "mismatch (differs from baseline)",
    Status.UNSUPPORTED: "unsupported",
}


class LeafNode(BaseModel):
    """Terminal API member. ``value`` is None when the member is absent."""

    kind: Literal["leaf"] = "leaf"
    value: Optional[str] = None

    model_config = ConfigDict(frozen=True)


class NamespaceNode(BaseModel):
    """Grouping of members, keyed by name in display order."""

    kind: Literal["namespace"] = "namespace"
    children: Dict[str, "Node"] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


Node = Annotated[Union[LeafNode, NamespaceNode], Field(discriminator="kind")]

NamespaceNode.model_rebuild()


class TargetInfo(BaseModel):
    """Display information for one target column."""

    id: str
    title: str
    version: str = ""
    file: str


class TargetCell(BaseModel):
    """One cell of the matrix for a given target.

    Leaf rows carry ``status``; namespace rows carry the aggregate counts.
    """

    status: Optional[Status] = None
    supported: Optional[int] = None
    total: Optional[int] = None
    percentage: Optional[str] = None
    coverage: Optional[float] = None

    @property
    def display(self) -> str:
        if self.status is not None:
            return self.status.symbol
        return self.percentage or ""


class ComparisonRow(BaseModel):
    """A single display row for a baseline entry."""

    key: str
    path: Tuple[str, ...]
    is_namespace: bool
    expanded: bool = False
    baseline_value: Optional[str] = None
    cells: Dict[str, TargetCell] = Field(default_factory=dict)

    @property
    def depth(self) -> int:
        return len(self.path) - 1


class ComparisonResult(BaseModel):
    """Rows in display order plus the totals for the compared node."""

    rows: List[ComparisonRow] = Field(default_factory=list)
    baseline_total: int = 0
    target_totals: Dict[str, int] = Field(default_factory=dict)

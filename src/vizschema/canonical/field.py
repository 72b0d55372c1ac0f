from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, List, Dict, Any


class TypeTag(str, Enum):
    """
    Raw classification of a single JSON value.
    Superset of the visualization types.
    """
    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    DATE = "string-date"
    URL = "url"
    OBJECT = "object"
    ARRAY = "array"
    NULL = "null"


class VisualizationType(str, Enum):
    NUMBER = "NUMBER"
    BOOLEAN = "BOOLEAN"
    URL = "URL"
    DATE = "DATE"
    STRING = "STRING"


class ConceptRole(str, Enum):
    DIMENSION = "DIMENSION"
    METRIC = "METRIC"


class SemanticGroup(str, Enum):
    DATETIME = "DATETIME"


# Data type names understood by the visualization tool's field API
OUTPUT_DATA_TYPES = {
    VisualizationType.NUMBER: "NUMBER",
    VisualizationType.BOOLEAN: "BOOLEAN",
    VisualizationType.URL: "URL",
    VisualizationType.DATE: "YEAR_MONTH_DAY_HOUR",
    VisualizationType.STRING: "STRING",
}


@dataclass
class FieldObservation:
    """
    Accumulates every type seen for one field path during a single
    inference pass.
    """
    path: str
    tags: List[TypeTag] = field(default_factory=list)
    saw_numeric: bool = False

    def record(self, tag: TypeTag) -> None:
        if tag not in self.tags:
            self.tags.append(tag)
        if tag is TypeTag.NUMBER:
            self.saw_numeric = True

    @property
    def is_container(self) -> bool:
        """
        True when the path only ever held nested objects (or nulls),
        so its children carry the data instead.
        """
        non_null = [t for t in self.tags if t is not TypeTag.NULL]
        return bool(non_null) and all(t is TypeTag.OBJECT for t in non_null)


@dataclass(frozen=True)
class ResolvedField:
    """
    Final, immutable description of one schema field.
    """
    name: str
    data_type: VisualizationType
    concept_role: ConceptRole
    semantic_group: Optional[SemanticGroup] = None

    @property
    def label(self) -> str:
        return self.name

    def to_dict(self) -> Dict[str, Any]:
        semantics: Dict[str, Any] = {"conceptType": self.concept_role.value}
        if self.concept_role is ConceptRole.METRIC:
            semantics["isReaggregatable"] = True
        if self.semantic_group is not None:
            semantics["semanticGroup"] = self.semantic_group.value

        return {
            "name": self.name,
            "label": self.label,
            "dataType": OUTPUT_DATA_TYPES[self.data_type],
            "semantics": semantics,
        }

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ResolvedField":
        """
        Rebuild a field from its output shape, e.g. a schema cached by
        the caller.
        """
        if not isinstance(payload, dict) or not payload.get("name"):
            raise ValueError(f"Schema field has no name: {payload!r}")

        data_type_name = str(payload.get("dataType") or "STRING").upper()
        data_type = _DATA_TYPES_BY_OUTPUT_NAME.get(data_type_name, VisualizationType.STRING)

        semantics = payload.get("semantics") or {}
        concept = str(semantics.get("conceptType") or "DIMENSION").upper()
        concept_role = (
            ConceptRole.METRIC if concept == ConceptRole.METRIC.value else ConceptRole.DIMENSION
        )

        return cls(
            name=payload["name"],
            data_type=data_type,
            concept_role=concept_role,
            semantic_group=(
                SemanticGroup.DATETIME if data_type is VisualizationType.DATE else None
            ),
        )


_DATA_TYPES_BY_OUTPUT_NAME = {
    **{name: vis_type for vis_type, name in OUTPUT_DATA_TYPES.items()},
    "DATE": VisualizationType.DATE,
    "TEXT": VisualizationType.STRING,
}

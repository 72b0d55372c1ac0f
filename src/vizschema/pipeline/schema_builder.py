from typing import List, Mapping

from vizschema.canonical.field import (
    ConceptRole,
    FieldObservation,
    ResolvedField,
    SemanticGroup,
    TypeTag,
    VisualizationType,
)
from vizschema.canonical.schema import SchemaDescriptor
from vizschema.utils.exceptions import EmptySchemaError


# Highest first. Tags not listed (null, array, object) fall through to STRING.
TYPE_PRECEDENCE = (
    (TypeTag.NUMBER, VisualizationType.NUMBER),
    (TypeTag.BOOLEAN, VisualizationType.BOOLEAN),
    (TypeTag.URL, VisualizationType.URL),
    (TypeTag.DATE, VisualizationType.DATE),
)


def resolve_type(tags) -> VisualizationType:
    observed = set(tags)
    for tag, vis_type in TYPE_PRECEDENCE:
        if tag in observed:
            return vis_type
    return VisualizationType.STRING


def resolve_field(observation: FieldObservation) -> ResolvedField:
    data_type = resolve_type(observation.tags)
    return ResolvedField(
        name=observation.path,
        data_type=data_type,
        concept_role=(
            ConceptRole.METRIC if observation.saw_numeric else ConceptRole.DIMENSION
        ),
        semantic_group=(
            SemanticGroup.DATETIME if data_type is VisualizationType.DATE else None
        ),
    )


def build_schema(observations: Mapping[str, FieldObservation]) -> SchemaDescriptor:
    """
    Resolve aggregated observations into a SchemaDescriptor.

    Fields keep first-seen order. Paths that only ever held nested objects
    are represented by their children and are not emitted themselves.

    Raises:
        EmptySchemaError: when no field can be resolved.
    """
    if not observations:
        raise EmptySchemaError(
            "Query returned no results or no fields. Cannot build schema."
        )

    fields: List[ResolvedField] = [
        resolve_field(observation)
        for observation in observations.values()
        if not observation.is_container
    ]

    if not fields:
        raise EmptySchemaError(
            "Could not determine any fields from the results. "
            "Check query and data structure."
        )

    return SchemaDescriptor(fields=fields)


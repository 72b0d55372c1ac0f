"""Tests for schema hashing and drift detection."""

import pytest

from vizschema.canonical.field import ConceptRole, ResolvedField, VisualizationType
from vizschema.canonical.schema import SchemaDescriptor
from vizschema.governance.schema_fingerprint import compute_schema_hash, diff_schemas


def _schema(*fields) -> SchemaDescriptor:
    return SchemaDescriptor(fields=[
        ResolvedField(
            name,
            data_type,
            ConceptRole.METRIC if data_type is VisualizationType.NUMBER else ConceptRole.DIMENSION,
        )
        for name, data_type in fields
    ])


class TestComputeSchemaHash:
    """Tests for compute_schema_hash()."""

    @pytest.mark.boundary
    def test_equal_schemas_hash_equal(self) -> None:
        """The hash is deterministic."""
        a = _schema(("id", VisualizationType.NUMBER), ("name", VisualizationType.STRING))
        b = _schema(("id", VisualizationType.NUMBER), ("name", VisualizationType.STRING))

        assert compute_schema_hash(a) == compute_schema_hash(b)
        assert len(compute_schema_hash(a)) == 64

    @pytest.mark.boundary
    def test_order_changes_hash(self) -> None:
        """Rows are positional, so field order is part of the hash."""
        a = _schema(("id", VisualizationType.NUMBER), ("name", VisualizationType.STRING))
        b = _schema(("name", VisualizationType.STRING), ("id", VisualizationType.NUMBER))

        assert compute_schema_hash(a) != compute_schema_hash(b)

    @pytest.mark.boundary
    def test_type_change_changes_hash(self) -> None:
        """A changed data type changes the hash."""
        a = _schema(("v", VisualizationType.STRING))
        b = _schema(("v", VisualizationType.URL))

        assert compute_schema_hash(a) != compute_schema_hash(b)


class TestDiffSchemas:
    """Tests for diff_schemas()."""

    @pytest.mark.boundary
    def test_added_removed_and_modified(self) -> None:
        """Each kind of drift is reported by field name."""
        old = _schema(("id", VisualizationType.STRING), ("gone", VisualizationType.STRING))
        new = _schema(("id", VisualizationType.NUMBER), ("fresh", VisualizationType.BOOLEAN))

        assert diff_schemas(old, new) == {
            "added_fields": ["fresh"],
            "removed_fields": ["gone"],
            "modified_fields": [
                {
                    "name": "id",
                    "old_type": "STRING",
                    "new_type": "NUMBER",
                    "old_concept": "DIMENSION",
                    "new_concept": "METRIC",
                },
            ],
        }

    @pytest.mark.boundary
    def test_no_drift(self) -> None:
        """Identical schemas produce an empty diff."""
        schema = _schema(("id", VisualizationType.NUMBER))

        assert diff_schemas(schema, schema) == {
            "added_fields": [],
            "removed_fields": [],
            "modified_fields": [],
        }

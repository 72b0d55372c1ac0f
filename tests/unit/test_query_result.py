"""Tests for query result validation."""

import pytest

from vizschema.input.query_result import QueryResult
from vizschema.utils.exceptions import ConnectorError, EmptySchemaError, QueryResultError


class TestFromDict:
    """Tests for QueryResult.from_dict()."""

    @pytest.mark.boundary
    def test_success(self, query_result) -> None:
        """A success response exposes its documents."""
        result = QueryResult.from_dict(query_result)

        assert result.status == "success"
        assert result.results == query_result["results"]
        assert result.is_empty is False

    @pytest.mark.boundary
    def test_missing_status_is_success(self) -> None:
        """Responses without a status are accepted."""
        assert QueryResult.from_dict({"results": [{"a": 1}]}).status == "success"

    @pytest.mark.boundary
    def test_failed_status_raises_with_details(self) -> None:
        """A non-success status surfaces the service errors."""
        errors = [{"code": 3000, "msg": "syntax error"}]

        with pytest.raises(QueryResultError) as excinfo:
            QueryResult.from_dict({"status": "fatal", "errors": errors})

        assert excinfo.value.status == "fatal"
        assert excinfo.value.errors == errors
        assert "syntax error" in str(excinfo.value)

    @pytest.mark.boundary
    @pytest.mark.parametrize("payload", [None, [], "text"])
    def test_non_object_payload(self, payload) -> None:
        """Only JSON objects are query results."""
        with pytest.raises(QueryResultError):
            QueryResult.from_dict(payload)

    @pytest.mark.boundary
    def test_results_must_be_a_list(self) -> None:
        """A scalar results member is malformed."""
        with pytest.raises(QueryResultError):
            QueryResult.from_dict({"status": "success", "results": {"a": 1}})

    @pytest.mark.boundary
    def test_null_results_are_empty(self) -> None:
        """results: null is treated as no documents."""
        result = QueryResult.from_dict({"status": "success", "results": None})

        assert result.results == []
        assert result.is_empty is True

    @pytest.mark.boundary
    def test_errors_share_a_base_class(self) -> None:
        """All connector failures derive from ConnectorError."""
        assert issubclass(QueryResultError, ConnectorError)
        assert issubclass(EmptySchemaError, ConnectorError)


class TestRequireResults:
    """Tests for require_results() and first_flavor()."""

    @pytest.mark.boundary
    def test_empty_results_raise(self) -> None:
        """Schema inference needs at least one document."""
        result = QueryResult.from_dict({"status": "success", "results": []})

        with pytest.raises(EmptySchemaError, match="no results"):
            result.require_results()

    @pytest.mark.boundary
    def test_first_flavor_from_nested_list(self, infer_result, flavor) -> None:
        """INFER output wraps flavors in an inner list; only the first is used."""
        assert QueryResult.from_dict(infer_result).first_flavor() == flavor

    @pytest.mark.boundary
    def test_first_flavor_from_flat_list(self, flavor) -> None:
        """A flat list of flavors is also accepted."""
        result = QueryResult.from_dict({"results": [flavor]})

        assert result.first_flavor() == flavor

    @pytest.mark.boundary
    def test_no_flavors(self) -> None:
        """An empty inner list holds no flavors."""
        result = QueryResult.from_dict({"results": [[]]})

        with pytest.raises(EmptySchemaError):
            result.first_flavor()

    @pytest.mark.boundary
    def test_non_object_flavor(self) -> None:
        """A flavor must be a JSON object."""
        result = QueryResult.from_dict({"results": [["not a flavor"]]})

        with pytest.raises(QueryResultError):
            result.first_flavor()

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from vizschema.utils.exceptions import EmptySchemaError, QueryResultError

SUCCESS_STATUS = "success"


@dataclass
class QueryResult:
    """
    Already-fetched response of the query service.
    """
    status: str
    results: List[Any] = field(default_factory=list)
    errors: List[Any] = field(default_factory=list)

    @classmethod
    def from_dict(cls, payload: Optional[Dict[str, Any]]) -> "QueryResult":
        """
        Validate a raw response payload.

        A missing status is treated as success (some services omit it);
        any other non-success status is surfaced as QueryResultError.
        """
        if not isinstance(payload, dict):
            raise QueryResultError("Query result must be a JSON object.")

        status = str(payload.get("status") or SUCCESS_STATUS).lower()
        errors = payload.get("errors") or []
        results = payload.get("results")

        if status != SUCCESS_STATUS:
            raise QueryResultError(
                f"Query failed. Status: {status}, Errors: {json.dumps(errors)}",
                status=status,
                errors=errors,
            )

        if results is None:
            results = []
        if not isinstance(results, list):
            raise QueryResultError(
                "Query result 'results' must be an array.",
                status=status,
                errors=errors,
            )

        return cls(status=status, results=results, errors=errors)

    @property
    def is_empty(self) -> bool:
        return not self.results

    def require_results(self) -> List[Any]:
        if self.is_empty:
            errors = json.dumps(self.errors) if self.errors else "No details provided."
            raise EmptySchemaError(
                "Query returned no results. Cannot build schema. "
                f"Status: {self.status}, Errors: {errors}"
            )
        return self.results

    def first_flavor(self) -> Dict[str, Any]:
        """
        Return the first flavor of an INFER-style result.

        Accepts results shaped as [[flavor, ...]] or [flavor, ...].
        Remaining flavors are ignored.
        """
        results = self.require_results()
        first = results[0]
        if isinstance(first, list):
            if not first:
                raise EmptySchemaError("INFER result contains no flavors.")
            first = first[0]

        if not isinstance(first, dict):
            raise QueryResultError(
                "INFER result flavor must be a JSON object.",
                status=self.status,
            )
        return first

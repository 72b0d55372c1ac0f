import logging
from typing import Any, Dict, Optional

from fastapi import Request

# ---------------- Input + config ----------------
from vizschema.input.query_result import QueryResult
from vizschema.config.connection import ConnectionConfig

# ---------------- Inference ----------------
from vizschema.governance.adapter_registry import AdapterRegistry
from vizschema.governance.schema_fingerprint import compute_schema_hash, diff_schemas
from vizschema.adapters.flavor_adapter import FlavorAdapter
from vizschema.adapters.sampling_adapter import DEFAULT_SAMPLE_SIZE
from vizschema.canonical.schema import SchemaDescriptor, schema_from_dict

# ---------------- Projection ----------------
from vizschema.pipeline.data_response import build_data_response, requested_field_names

# ---------------- Observability ----------------
from vizschema.observability.logger import log_event, generate_request_id, RequestTimer
from vizschema.observability.identity import extract_user_identity
from vizschema.utils.exceptions import EmptySchemaError, QueryResultError

DEFAULT_STRATEGY = "SAMPLING"


def infer_schema(
    result: QueryResult,
    strategy: str = DEFAULT_STRATEGY,
    sample_size: Optional[int] = DEFAULT_SAMPLE_SIZE,
) -> SchemaDescriptor:
    """
    Build a schema from a query result with the named strategy.

    Raises:
        EmptySchemaError: result has no rows or no resolvable fields.
    """
    adapter_cls = AdapterRegistry.get_adapter(strategy)

    if issubclass(adapter_cls, FlavorAdapter):
        adapter = adapter_cls(result.first_flavor())
    else:
        adapter = adapter_cls(result.require_results(), sample_size=sample_size)

    return adapter.parse()


def _strategy(payload: Dict) -> str:
    return str(payload.get("strategy") or DEFAULT_STRATEGY).upper()


def _sample_size(payload: Dict) -> Optional[int]:
    raw = payload.get("sample_size", DEFAULT_SAMPLE_SIZE)
    return None if raw is None else int(raw)


def _is_flavor(strategy: str) -> bool:
    return issubclass(AdapterRegistry.get_adapter(strategy), FlavorAdapter)


def _schema_source(payload: Dict, strategy: str) -> Optional[Dict]:
    # INFER output may travel next to the data result
    if _is_flavor(strategy) and payload.get("infer_result") is not None:
        return payload["infer_result"]
    return payload.get("result")


def _source_description(payload: Dict, for_schema: bool) -> Optional[Dict[str, Any]]:
    if not payload.get("connection"):
        return None
    return ConnectionConfig.from_params(payload["connection"]).describe(for_schema=for_schema)


# ==========================================================
# SCHEMA
# ==========================================================
def route_schema(payload: Dict, request: Optional[Request] = None) -> Dict:
    """
    Flow:
    QueryResult → Strategy Adapter → Observations → SchemaDescriptor
    """
    request_id = generate_request_id()
    user_id = extract_user_identity(request, payload)
    timer = RequestTimer()
    strategy = _strategy(payload)

    log_event("SCHEMA_INFERENCE_STARTED", {
        "request_id": request_id,
        "user_id": user_id,
        "strategy": strategy,
    })

    try:
        source = _source_description(payload, for_schema=True)
        result = QueryResult.from_dict(_schema_source(payload, strategy))
        schema = infer_schema(result, strategy, _sample_size(payload))
        fingerprint = compute_schema_hash(schema)

        response: Dict[str, Any] = {
            "status": "SUCCESS",
            "strategy": strategy,
            "schema": schema.to_dict(),
            "fingerprint": fingerprint,
        }

        if source:
            response["source"] = source

        # Drift against a schema the caller cached earlier
        if payload.get("previous_schema") is not None:
            previous = schema_from_dict(payload["previous_schema"])
            response["schema_drift"] = diff_schemas(previous, schema)
            response["changed"] = compute_schema_hash(previous) != fingerprint

        log_event("SCHEMA_INFERENCE_COMPLETED", {
            "request_id": request_id,
            "strategy": strategy,
            "documents": len(result.results),
            "field_count": len(schema),
            "fingerprint": fingerprint,
            "duration_seconds": timer.duration(),
        })
        return response

    except Exception as e:
        log_event("SCHEMA_INFERENCE_FAILED", {
            "request_id": request_id,
            "strategy": strategy,
            "error_type": type(e).__name__,
            "error": str(e),
            "duration_seconds": timer.duration(),
        }, level=logging.ERROR)
        raise


# ==========================================================
# DATA
# ==========================================================
def route_data(payload: Dict, request: Optional[Request] = None) -> Dict:
    """
    Flow:
    QueryResult + requested fields (+ cached schema) → unwrapped rows →
    positionally aligned values
    """
    request_id = generate_request_id()
    user_id = extract_user_identity(request, payload)
    timer = RequestTimer()

    log_event("ROW_PROJECTION_STARTED", {
        "request_id": request_id,
        "user_id": user_id,
    })

    try:
        names = requested_field_names(payload.get("fields"))
        source = _source_description(payload, for_schema=False)
        result = QueryResult.from_dict(payload.get("result"))

        schema = _schema_for_data(payload)
        response: Dict[str, Any] = build_data_response(result.results, names, schema)

        if source:
            response["source"] = source

        log_event("ROW_PROJECTION_COMPLETED", {
            "request_id": request_id,
            "requested_fields": len(names),
            "rows": len(response["rows"]),
            "duration_seconds": timer.duration(),
        })
        return response

    except Exception as e:
        log_event("ROW_PROJECTION_FAILED", {
            "request_id": request_id,
            "error_type": type(e).__name__,
            "error": str(e),
            "duration_seconds": timer.duration(),
        }, level=logging.ERROR)
        raise


def _schema_for_data(payload: Dict) -> Optional[SchemaDescriptor]:
    """
    Prefer the caller's cached schema; otherwise infer one. For the flavor
    strategy the structural description comes from `infer_result` when given.
    A result that cannot yield a schema falls back to STRING fields.
    """
    if payload.get("schema") is not None:
        return schema_from_dict(payload["schema"])

    strategy = _strategy(payload)
    try:
        source = QueryResult.from_dict(_schema_source(payload, strategy))
        return infer_schema(source, strategy, _sample_size(payload))
    except (EmptySchemaError, QueryResultError) as e:
        log_event("SCHEMA_INFERENCE_WARNING", {
            "message": "No schema could be inferred; requested fields fall back to STRING.",
            "error": str(e),
        }, level=logging.WARNING)
        return None

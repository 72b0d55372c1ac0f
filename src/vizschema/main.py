from fastapi import FastAPI, HTTPException, Request

from vizschema.router import route_data, route_schema
from vizschema.utils.exceptions import (
    ConnectorError,
    EmptySchemaError,
    QueryResultError,
)

app = FastAPI(
    title="Visualization Schema Connector",
    version="1.0.0"
)


def _error(status_code: int, e: Exception) -> HTTPException:
    return HTTPException(
        status_code=status_code,
        detail={
            "status": "ERROR",
            "error": type(e).__name__,
            "message": str(e),
        },
    )


def _dispatch(handler, payload: dict, request: Request):
    try:
        return handler(payload, request)
    except EmptySchemaError as e:
        raise _error(422, e)
    except QueryResultError as e:
        # Upstream query service reported a failure
        raise _error(502, e)
    except (ConnectorError, ValueError) as e:
        raise _error(400, e)


@app.post("/schema")
def get_schema(payload: dict, request: Request):
    return _dispatch(route_schema, payload, request)


@app.post("/data")
def get_data(payload: dict, request: Request):
    return _dispatch(route_data, payload, request)

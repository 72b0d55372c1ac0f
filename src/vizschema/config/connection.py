import re
from dataclasses import dataclass
from typing import Any, Dict, Optional

from vizschema.utils.exceptions import ConfigValidationError

DEFAULT_SCOPE = "_default"
DEFAULT_COLLECTION = "_default"
DEFAULT_TIMEOUT_MS = 30000
DEFAULT_QUERY_PORT = 18093
SCHEMA_SAMPLE_LIMIT = 100
CAPELLA_DOMAIN = "cloud.couchbase.com"

SCAN_CONSISTENCY_VALUES = {"not_bounded", "request_plus"}

_SCHEMES = ("couchbases://", "couchbase://", "https://", "http://")
_PORT_PATTERN = re.compile(r":\d+$")


def _is_true(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("true", "1", "yes", "y")


def construct_api_url(path: str, default_port: Optional[int] = None) -> str:
    """
    Normalize a user-supplied host into an https base URL.

    The scheme is replaced with https. A default port is appended unless
    one is already present or the host is a Capella endpoint.
    """
    host = path.strip()
    for scheme in _SCHEMES:
        if host.startswith(scheme):
            host = host[len(scheme):]
            break

    host = host.rstrip("/")
    is_capella = CAPELLA_DOMAIN in host

    if default_port and not is_capella and not _PORT_PATTERN.search(host):
        host = f"{host}:{default_port}"

    return f"https://{host}"


def _quote(identifier: str) -> str:
    return f"`{identifier}`"


@dataclass(frozen=True)
class ConnectionConfig:
    """
    Explicit connection settings for the query service.

    Passed around as a value; nothing here performs I/O.
    """
    base_url: str
    bucket: str
    scope: str = DEFAULT_SCOPE
    collection: str = DEFAULT_COLLECTION
    query: Optional[str] = None
    timeout_ms: int = DEFAULT_TIMEOUT_MS
    scan_consistency: Optional[str] = None
    vector_field: Optional[str] = None

    # ------------------------------------------
    # Construction + validation
    # ------------------------------------------
    @classmethod
    def from_params(cls, params: Optional[Dict[str, Any]]) -> "ConnectionConfig":
        params = dict(params or {})

        base_url = (params.get("base_url") or params.get("baseUrl") or "").strip()
        if not base_url:
            raise ConfigValidationError("Server URL is required.")

        bucket = (params.get("bucket") or "").strip()
        scope = (params.get("scope") or "").strip() or DEFAULT_SCOPE
        collection = (params.get("collection") or "").strip() or DEFAULT_COLLECTION

        # Collection selector form: bucket.scope.collection
        if not bucket and collection.count(".") == 2:
            bucket, scope, collection = collection.split(".")

        if not bucket:
            raise ConfigValidationError("Bucket name is required.")

        query = (params.get("query") or "").strip() or None

        if CAPELLA_DOMAIN in base_url and not base_url.startswith(("https://", "couchbases://")):
            raise ConfigValidationError(
                "Capella requires a secure connection. URL must start with https://"
            )

        timeout_ms = cls._validate_timeout(params.get("timeout_ms", params.get("timeout")))

        scan_consistency = params.get("scan_consistency") or params.get("scanConsistency")
        if scan_consistency and scan_consistency not in SCAN_CONSISTENCY_VALUES:
            raise ConfigValidationError(
                'Invalid scan consistency value. Must be "not_bounded" or "request_plus".'
            )

        vector_field = None
        if _is_true(params.get("enable_vector_search", params.get("enableVectorSearch", False))):
            vector_field = (params.get("vector_field") or params.get("vectorField") or "").strip()
            if not vector_field:
                raise ConfigValidationError(
                    "Vector field is required when vector search is enabled."
                )

        return cls(
            base_url=base_url,
            bucket=bucket,
            scope=scope,
            collection=collection,
            query=query,
            timeout_ms=timeout_ms,
            scan_consistency=scan_consistency or None,
            vector_field=vector_field,
        )

    @staticmethod
    def _validate_timeout(raw: Any) -> int:
        if raw in (None, ""):
            return DEFAULT_TIMEOUT_MS
        try:
            timeout = int(str(raw).strip())
        except ValueError:
            raise ConfigValidationError("Timeout must be a positive number.")
        if timeout <= 0:
            raise ConfigValidationError("Timeout must be a positive number.")
        return timeout

    # ------------------------------------------
    # Derived values
    # ------------------------------------------
    def query_context(self) -> str:
        context = self.bucket
        if self.scope != DEFAULT_SCOPE:
            context += f".{self.scope}"
        if self.collection != DEFAULT_COLLECTION:
            context += f".{self.collection}"
        return context

    def collection_statement(self, limit: Optional[int] = None) -> str:
        """
        SELECT * over the configured collection. Schema sampling uses
        SCHEMA_SAMPLE_LIMIT; data reads are unlimited.
        """
        statement = "SELECT * FROM " + ".".join(
            _quote(part) for part in (self.bucket, self.scope, self.collection)
        )
        if limit is not None:
            statement += f" LIMIT {int(limit)}"
        return statement

    def statement(self, for_schema: bool = False) -> str:
        """
        The custom query when one is configured, otherwise the generated
        collection statement.
        """
        if self.query:
            return self.query
        return self.collection_statement(SCHEMA_SAMPLE_LIMIT if for_schema else None)

    def timeout(self) -> str:
        return f"{self.timeout_ms}ms"

    def service_url(
        self,
        path: str = "/query/service",
        default_port: Optional[int] = DEFAULT_QUERY_PORT,
    ) -> str:
        return construct_api_url(self.base_url, default_port) + path

    def describe(self, for_schema: bool = False) -> Dict[str, Any]:
        """
        Request description handed back to the fetch layer.
        """
        description: Dict[str, Any] = {
            "url": self.service_url(),
            "statement": self.statement(for_schema=for_schema),
            "query_context": self.query_context(),
            "timeout": self.timeout(),
        }
        if self.scan_consistency:
            description["scan_consistency"] = self.scan_consistency
        if self.vector_field:
            description["vector_search"] = {"field": self.vector_field}
        return description

import argparse
import json
import os
import shutil
from typing import Any, Dict, List, Optional

from vizschema.governance.adapter_registry import AdapterRegistry
from vizschema.outputs.schema_json_exporter import SchemaJSONExporter
from vizschema.outputs.schema_yaml_exporter import SchemaYAMLExporter
from vizschema.router import route_data, route_schema


class C:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    BLUE = "\033[34m"


def cprint(text: str, color: str = C.RESET, bold: bool = False):
    prefix = (C.BOLD if bold else "") + color
    print(f"{prefix}{text}{C.RESET}")


def _clean_output_dir(path: str) -> None:
    if not os.path.isdir(path):
        return
    for name in os.listdir(path):
        full = os.path.join(path, name)
        if os.path.isfile(full) or os.path.islink(full):
            os.remove(full)
        elif os.path.isdir(full):
            shutil.rmtree(full)


def _read_json(path: str) -> Any:
    with open(path, "r", encoding="utf-8-sig") as f:
        return json.load(f)


def _write_json(path: str, payload: Any) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2)


def load_query_result(path: str) -> Dict[str, Any]:
    """
    A query-result file is either the service response object or a bare
    array of documents.
    """
    raw = _read_json(path)
    if isinstance(raw, list):
        return {"status": "success", "results": raw}
    return raw


def _split_fields(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [name.strip() for name in raw.split(",") if name.strip()]


def persist_artifacts(
    schema_response: Dict[str, Any],
    data_response: Optional[Dict[str, Any]],
    output_dir: str,
) -> None:
    schema = schema_response["schema"]
    SchemaJSONExporter(schema).export_to_file(os.path.join(output_dir, "schema.json"))
    SchemaYAMLExporter(schema).export_to_file(os.path.join(output_dir, "schema.yaml"))

    if data_response is not None:
        _write_json(os.path.join(output_dir, "rows.json"), data_response)

    summary = {
        "status": schema_response.get("status"),
        "strategy": schema_response.get("strategy"),
        "fingerprint": schema_response.get("fingerprint"),
        "field_count": len(schema),
        "fields": [f["name"] for f in schema],
        "row_count": len(data_response["rows"]) if data_response is not None else None,
        "source": schema_response.get("source"),
    }
    # Drop null values
    summary = {k: v for k, v in summary.items() if v is not None}
    _write_json(os.path.join(output_dir, "run_summary.json"), summary)


def build_payloads(args: argparse.Namespace):
    if args.config:
        base = _read_json(args.config)
    else:
        base = {}

    if args.results:
        base["result"] = load_query_result(args.results)
    if args.infer_results:
        base["infer_result"] = load_query_result(args.infer_results)
    if args.strategy:
        base["strategy"] = args.strategy
    if args.sample_size is not None:
        base["sample_size"] = args.sample_size
    base.setdefault("user_id", args.user_id)

    if "result" not in base:
        raise ValueError("A query result is required (--results or config 'result').")

    schema_payload = dict(base)

    fields = _split_fields(args.fields) or base.get("fields") or []
    data_payload = dict(base, fields=fields) if fields else None
    return schema_payload, data_payload


def main(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Visualization schema connector CLI")

    parser.add_argument("--config", help="Path to JSON payload file")
    parser.add_argument("--results", help="Query result JSON file (response object or array)")
    parser.add_argument("--infer-results", help="INFER result JSON file for the FLAVOR strategy")
    parser.add_argument(
        "--strategy",
        type=str.upper,
        choices=AdapterRegistry.strategies(),
        help="Schema inference strategy (default SAMPLING)",
    )
    parser.add_argument("--sample-size", type=int, help="Documents to sample (default 100)")
    parser.add_argument("--fields", help="Comma separated field names to project")

    parser.add_argument("--output-dir", default="artifacts")
    parser.add_argument("--clean-output-dir", action="store_true")
    parser.add_argument("--user-id", default="cli_user")

    args = parser.parse_args(argv)

    try:
        schema_payload, data_payload = build_payloads(args)

        if args.output_dir:
            os.makedirs(args.output_dir, exist_ok=True)
            if args.clean_output_dir:
                _clean_output_dir(args.output_dir)

        cprint("\n[START] Schema inference started", C.BLUE, bold=True)
        schema_response = route_schema(schema_payload)
        cprint(
            f"[INFO] Strategy={schema_response['strategy']}  "
            f"Fields={len(schema_response['schema'])}",
            C.DIM,
        )

        data_response = None
        if data_payload is not None:
            # Project with the schema just inferred
            data_payload["schema"] = schema_response["schema"]
            data_response = route_data(data_payload)
            cprint(f"[INFO] Rows={len(data_response['rows'])}", C.DIM)

        if args.output_dir:
            persist_artifacts(schema_response, data_response, args.output_dir)
            cprint(f"\n[DONE] Artifacts written to: {args.output_dir}", C.GREEN, bold=True)

        cprint("[COMPLETE] Schema inference completed", C.GREEN, bold=True)

    except Exception as e:
        cprint("\n[FAILED] Schema inference failed.", C.RED, bold=True)
        cprint(str(e), C.RED)
        raise SystemExit(1)


if __name__ == "__main__":
    main()

import os
from typing import Dict, Optional

import yaml

from vizschema.cli import load_query_result, persist_artifacts
from vizschema.config.connection import ConnectionConfig
from vizschema.router import route_data, route_schema


class ConfigExecutor:
    """
    Runs schema inference (and optional row projection) from a YAML file.

    Relative paths in the file are resolved against the file's directory.
    """

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.base_dir = os.path.dirname(os.path.abspath(config_path))
        self.config = self._load_config()

    # ------------------------------------------
    # Load YAML
    # ------------------------------------------
    def _load_config(self) -> Dict:
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _resolve(self, path: Optional[str]) -> Optional[str]:
        if not path:
            return None
        if os.path.isabs(path):
            return path
        return os.path.join(self.base_dir, path)

    # ------------------------------------------
    # Build Router Payload
    # ------------------------------------------
    def _build_payload(self) -> Dict:
        cfg = self.config
        source_cfg = cfg.get("source", {}) or {}
        inference = cfg.get("inference", {}) or {}

        results_file = self._resolve(source_cfg.get("results_file"))
        if not results_file:
            raise ValueError("Config must define source.results_file")

        payload = {
            "result": load_query_result(results_file),
            "strategy": inference.get("strategy", "SAMPLING"),
            "sample_size": inference.get("sample_size", 100),
            "user_id": cfg.get("user_id", "config_executor"),
        }

        infer_file = self._resolve(source_cfg.get("infer_results_file"))
        if infer_file:
            payload["infer_result"] = load_query_result(infer_file)

        if cfg.get("connection"):
            # Fail early on bad connection settings
            ConnectionConfig.from_params(cfg["connection"])
            payload["connection"] = cfg["connection"]

        return payload

    # ------------------------------------------
    # Execute Pipeline
    # ------------------------------------------
    def execute(self) -> Dict:
        payload = self._build_payload()

        schema_response = route_schema(payload)

        data_response = None
        fields = self.config.get("fields") or []
        if fields:
            data_response = route_data(
                dict(payload, fields=fields, schema=schema_response["schema"])
            )

        output_dir = self._resolve(self.config.get("output_dir", "outputs"))
        os.makedirs(output_dir, exist_ok=True)
        persist_artifacts(schema_response, data_response, output_dir)

        return {
            "schema": schema_response,
            "data": data_response,
            "output_dir": output_dir,
        }

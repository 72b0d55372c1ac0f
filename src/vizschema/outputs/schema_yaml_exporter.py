import yaml
from typing import Any, Dict, List


class SchemaYAMLExporter:
    """
    Exports a schema (in its output shape) to YAML, keeping field order.
    """

    def __init__(self, schema: List[Dict[str, Any]]):
        self.schema = schema

    def export_to_string(self) -> str:
        return yaml.safe_dump(
            self.schema,
            sort_keys=False,
            default_flow_style=False,
        )

    def export_to_file(self, file_path: str):
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(self.export_to_string())

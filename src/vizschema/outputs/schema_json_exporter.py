import json
from typing import Any, Dict, List


class SchemaJSONExporter:
    """
    Exports a schema (in its output shape) to JSON.
    """

    def __init__(self, schema: List[Dict[str, Any]]):
        self.schema = schema

    def export_to_file(self, file_path: str, indent: int = 2):
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.schema, f, indent=indent)

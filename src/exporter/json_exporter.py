"""JSON exporter."""
import json
from pathlib import Path
from typing import Dict, Any


class JsonExporter:
    """Export built request bodies to JSON."""

    def export(self, output_file: Path, body: Dict[str, Any]) -> None:
        """Export to JSON file."""
        output_file = Path(output_file)
        output_file.parent.mkdir(parents=True, exist_ok=True)

        with open(output_file, "w") as f:
            json.dump(body, f, indent=2, default=str)

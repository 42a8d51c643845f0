"""Step outputs for GitHub Actions."""

import json
import os
import uuid
from pathlib import Path
from typing import Any


def set_output(name: str, value: Any, output_path: str | Path | None = None) -> bool:
    """
    Publish a step output.

    Non-string values are serialized to JSON. Values are written with the
    heredoc syntax so multi-line text survives.

    Args:
        name: Output name
        value: Output value
        output_path: Output file (defaults to $GITHUB_OUTPUT)

    Returns:
        True if written, False when no output file is available
    """
    if output_path is None:
        output_path = os.environ.get("GITHUB_OUTPUT")
    if not output_path:
        return False

    text = value if isinstance(value, str) else json.dumps(value)
    delimiter = f"ghadelimiter_{uuid.uuid4()}"
    with open(output_path, "a") as f:
        f.write(f"{name}<<{delimiter}\n{text}\n{delimiter}\n")
    return True

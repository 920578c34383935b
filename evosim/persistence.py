"""Save and load brain models as JSON files.

File layout::

    {
        "format_version": 1,
        "saved_at": "2026-01-01T12:00:00",
        "metadata": {"generation": 12, "fitness": 143.2},
        "model": {"network_shape": [...], "layers": [...]}
    }

A bare model (the output of ``NeuralNetwork.get_model()``) is also accepted
when loading.
"""

import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Union

from evosim.exceptions import PersistenceError

logger = logging.getLogger(__name__)

MODEL_FORMAT_VERSION = 1

PathLike = Union[str, "os.PathLike[str]"]


def save_model(
    path: PathLike, model: Dict[str, Any], metadata: Optional[Dict[str, Any]] = None
) -> Path:
    """Write ``model`` to ``path``, creating parent directories.

    Returns:
        The path written

    Raises:
        PersistenceError: If the file cannot be written
    """
    target = Path(path)
    payload = {
        "format_version": MODEL_FORMAT_VERSION,
        "saved_at": datetime.now().isoformat(timespec="seconds"),
        "metadata": metadata or {},
        "model": model,
    }
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_suffix(target.suffix + ".tmp")
        tmp.write_text(json.dumps(payload), encoding="utf-8")
        os.replace(tmp, target)
    except (OSError, TypeError, ValueError) as exc:
        raise PersistenceError(f"Failed to save model to {target}: {exc}") from exc

    logger.info("Saved model to %s", target)
    return target


def load_model_file(path: PathLike) -> Dict[str, Any]:
    """Read a saved model file, returning the full payload.

    Raises:
        PersistenceError: If the file is missing, unreadable or malformed
    """
    source = Path(path)
    try:
        data = json.loads(source.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise PersistenceError(f"Model file not found: {source}") from exc
    except (OSError, json.JSONDecodeError) as exc:
        raise PersistenceError(f"Failed to read model file {source}: {exc}") from exc

    if isinstance(data, dict) and "model" in data:
        version = data.get("format_version", MODEL_FORMAT_VERSION)
        if version != MODEL_FORMAT_VERSION:
            raise PersistenceError(
                f"Unsupported model format version {version} in {source}"
            )
        payload = data
    elif isinstance(data, (dict, list)):
        payload = {"format_version": MODEL_FORMAT_VERSION, "metadata": {}, "model": data}
    else:
        raise PersistenceError(f"{source} does not contain a model")

    logger.info("Loaded model from %s", source)
    return payload


def load_model(path: PathLike) -> Dict[str, Any]:
    """Read only the model part of a saved file."""
    return load_model_file(path)["model"]

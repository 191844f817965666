from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from .exceptions import WriteFailure
from .types import OutputDocument

logger = logging.getLogger(__name__)


def dumps(doc: OutputDocument) -> str:
    return json.dumps(doc.to_payload(), indent=2, ensure_ascii=False) + "\n"


def write_output(doc: OutputDocument, path: str | Path) -> Path:
    """
    Replace `path` with the serialised document.

    The JSON goes to a temp file beside the target which is then renamed over
    it, so readers never see a partial file. Any filesystem error raises
    WriteFailure and leaves the previous file untouched.
    """
    path = Path(path)
    payload = dumps(doc)
    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            "w",
            encoding="utf-8",
            dir=path.parent,
            prefix=f".{path.name}.",
            suffix=".tmp",
            delete=False,
        ) as fh:
            tmp_name = fh.name
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_name, 0o644)  # mkstemp creates 0600
        os.replace(tmp_name, path)
    except OSError as exc:
        if tmp_name is not None:
            try:
                os.unlink(tmp_name)
            except FileNotFoundError:
                pass
        raise WriteFailure(f"Cannot write {path}: {exc}") from exc

    logger.debug("Wrote %d bytes to %s", len(payload.encode("utf-8")), path)
    return path


def read_output(path: str | Path) -> OutputDocument:
    with open(path, "r", encoding="utf-8") as fh:
        return OutputDocument.model_validate(json.load(fh))

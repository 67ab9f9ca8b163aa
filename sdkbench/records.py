from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field
from pydantic_core import to_jsonable_python

logger = logging.getLogger(__name__)


def format_duration(ms: int) -> str:
    """Render milliseconds as ``"<seconds>:<millis>"``, e.g. 1500 -> ``"1:500"``."""
    if ms < 0:
        raise ValueError(f"duration must be non-negative, got {ms}")
    seconds, millis = divmod(int(ms), 1000)
    return f"{seconds}:{millis:03d}"


class ResultRecord(BaseModel):
    duration: str
    duration_ms: int = Field(alias="durationMs")
    result: Any = None
    timestamp: datetime
    error: str | None = None

    model_config = {"populate_by_name": True}

    def to_json(self) -> str:
        data = self.model_dump(mode="json", by_alias=True)
        if self.error is None:
            data.pop("error")
        return json.dumps(data, ensure_ascii=False, indent=2)


def result_path(results_dir: Path | str, label: str) -> Path:
    return Path(results_dir) / f"{label}.json"


def persist_result(
    label: str,
    duration_ms: int,
    response: Any,
    results_dir: Path | str,
    error: BaseException | None = None,
) -> Path:
    """Write one client's record to ``<results_dir>/<label>.json``.

    The file is overwritten on every run. A failed call is stored with a null
    ``result`` and the error text so it can never be mistaken for a success.
    """

    record = ResultRecord(
        duration=format_duration(duration_ms),
        duration_ms=duration_ms,
        result=to_jsonable_python(response, fallback=str),
        timestamp=datetime.now(timezone.utc),
        error=None if error is None else f"{type(error).__name__}: {error}",
    )
    path = result_path(results_dir, label)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(record.to_json(), encoding="utf-8")
    logger.info("Saved %s result to %s", label, path)
    return path


def load_result(path: Path | str) -> ResultRecord:
    return ResultRecord.model_validate_json(Path(path).read_text(encoding="utf-8"))

"""Result serialization — SimulationResult to JSON-ready dicts and report files."""

from __future__ import annotations

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter

from combat_balance.core.models import SimulationResult

logger = logging.getLogger(__name__)

REPORT_VERSION = "1.0"

_result_ta = TypeAdapter(SimulationResult)


def result_to_dict(result: SimulationResult, max_fights: int | None = None) -> dict[str, Any]:
    """JSON-compatible dict of *result*.

    With *max_fights* set, only the first ``max_fights`` fights are kept;
    summary and alerts still describe the full run.
    """
    if max_fights is not None and len(result.fights) > max_fights:
        result = replace(result, fights=result.fights[:max_fights])
    return _result_ta.dump_python(result, mode="json")


class ReportWriter:
    """Writes a SimulationResult to a JSON report file."""

    __slots__ = ("_path", "_max_fights")

    def __init__(self, path: str | Path, max_fights: int | None = None) -> None:
        self._path = Path(path)
        self._max_fights = max_fights

    @property
    def path(self) -> Path:
        return self._path

    def write(self, result: SimulationResult) -> Path:
        report = {
            "version": REPORT_VERSION,
            "total_fights": len(result.fights),
            "result": result_to_dict(result, self._max_fights),
        }
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(report, indent=2), encoding="utf-8")
        logger.info("Report saved to %s (%d fights)", self._path, len(result.fights))
        return self._path

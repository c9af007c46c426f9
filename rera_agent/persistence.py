"""Write per-target results to JSON and CSV."""

import csv
import io
import json
import re
from pathlib import Path
from typing import Any, Dict, List

from .logging_utils import TargetLogger
from .models import SessionOutcome

SURVEY_NUMBER_COLUMN = "Survey Number"


def slugify(target: str) -> str:
    """Lower-case the identifier and collapse whitespace runs to ``_``."""
    return re.sub(r"\s+", "_", target.lower())


def pivot_land_details(land_details: List[Dict[str, str]]) -> List[Dict[str, str]]:
    """One row per survey number; columns appear only where a field was seen.

    Rows keep the order in which survey numbers first appear, and later
    values for the same (survey number, field) win.
    """
    groups: Dict[str, Dict[str, str]] = {}
    for detail in land_details:
        group = groups.setdefault(detail["surveyNumber"], {})
        group[detail["field"]] = detail["value"]
    return [{SURVEY_NUMBER_COLUMN: survey, **fields} for survey, fields in groups.items()]


def to_csv(rows: List[Dict[str, Any]]) -> str:
    """CSV text whose header is the union of row keys in first-seen order."""
    fieldnames: List[str] = []
    for row in rows:
        for key in row:
            if key not in fieldnames:
                fieldnames.append(key)
    buffer = io.StringIO()
    writer = csv.DictWriter(buffer, fieldnames=fieldnames, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writeheader()
    writer.writerows(rows)
    return buffer.getvalue()


def dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _write(path: Path, text: str, logger: TargetLogger) -> None:
    path.write_text(text, encoding="utf-8")
    logger.info("Saved results to %s", path)


def persist_land_and_documents(outcome: SessionOutcome, output_dir: Path, logger: TargetLogger) -> None:
    base = slugify(outcome.target)
    json_dir = Path(output_dir) / "json"
    csv_dir = Path(output_dir) / "csv"
    json_dir.mkdir(parents=True, exist_ok=True)
    csv_dir.mkdir(parents=True, exist_ok=True)

    land_details = outcome.result.get("landDetails") or []
    _write(json_dir / f"{base}_land_details.json", dump_json(land_details), logger)
    if land_details:
        _write(csv_dir / f"{base}_land_details.csv", to_csv(pivot_land_details(land_details)), logger)

    documents = outcome.result.get("documents") or []
    if documents:
        _write(json_dir / f"{base}_documents.json", dump_json(documents), logger)
        _write(csv_dir / f"{base}_documents.csv", to_csv(documents), logger)


def persist_project_details(outcome: SessionOutcome, path: Path, logger: TargetLogger) -> None:
    """Single-file output of the registration-number flow."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = {
        "projectDetails": outcome.result.get("projectDetails"),
        "complaints": outcome.result.get("complaints"),
    }
    _write(path, dump_json(payload), logger)

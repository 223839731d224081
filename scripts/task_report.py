"""
CLI script to build the analytics report for a JSON export of tasks.

Usage:
    python -m scripts.task_report path/to/tasks.json
    python -m scripts.task_report path/to/tasks.json --horizon 8 --output report.json
"""

import argparse
import json
import logging
from pathlib import Path
from typing import List

from src.core.models import Task
from src.services.analytics_service import AnalyticsService

logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(message)s")
logger = logging.getLogger("task_report")


def load_tasks(path: Path) -> List[Task]:
    with path.open("r", encoding="utf-8") as fh:
        payload = json.load(fh)
    rows = payload.get("tasks", []) if isinstance(payload, dict) else payload
    if not isinstance(rows, list):
        raise ValueError(f"Expected a list of tasks in {path}")
    return [Task.model_validate(row) for row in rows]


def main() -> None:
    parser = argparse.ArgumentParser(description="Build ROI, KPI and pipeline analytics for a task export")
    parser.add_argument("tasks_file", type=Path, help="JSON file: a list of tasks or {\"tasks\": [...]}")
    parser.add_argument("--horizon", type=int, default=None, help="Forecast horizon in weeks")
    parser.add_argument("--output", type=Path, default=None, help="Write the report here instead of stdout")
    args = parser.parse_args()

    tasks = load_tasks(args.tasks_file)
    logger.info("Loaded %s tasks from %s", len(tasks), args.tasks_file)

    report = AnalyticsService(forecast_horizon=args.horizon).build_report(tasks)
    rendered = json.dumps(report.model_dump(mode="json"), indent=2)

    if args.output:
        args.output.write_text(rendered, encoding="utf-8")
        logger.info("Saved report → %s", args.output)
    else:
        print(rendered)


if __name__ == "__main__":
    main()

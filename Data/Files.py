# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Data/Files.py
#  Purpose: Write ledgers and summaries to JSON and CSV files.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

import csv
import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence

from Core.Job import Job
from Data.Records import Map_Job
from Metrics.Collector import Run_Summary
from Models.Store_Base import Store_Kind


RESULTS_FIELDS = (
    "Run_ID", "Store", "Kind", "Count",
    "Average", "Best", "Worst",
    "LatencyP50", "LatencyP90", "LatencyP99",
    "Nudges",
)


def Save_Jobs_Json(
    out_dir: Path,
    name_str: str,
    jobs_seq_job: Sequence[Job],
    store_kind_opt: Optional[Store_Kind] = None,
) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / f"{name_str}.json"
    with open(out_path, "w", encoding="utf-8") as handle:
        json.dump([Map_Job(job_, store_kind_opt) for job_ in jobs_seq_job], handle, indent=2)
    return out_path


def Write_Results_Csv(out_dir: Path, summaries_dict: Dict[str, Run_Summary]) -> Optional[Path]:
    rows: List[Dict[str, object]] = []
    for store_short_str, summary in summaries_dict.items():
        for title_str, results in summary.results.items():
            rows.append(
                {
                    "Run_ID": summary.run_id,
                    "Store": store_short_str,
                    "Kind": title_str,
                    "Count": int(results.count_i32),
                    "Average": float(results.average.value_f64),
                    "Best": float(results.best.value_f64),
                    "Worst": float(results.worst.value_f64),
                    "LatencyP50": float(results.latency.p50_f64),
                    "LatencyP90": float(results.latency.p90_f64),
                    "LatencyP99": float(results.latency.p99_f64),
                    "Nudges": "" if summary.nudges_opt is None else int(summary.nudges_opt),
                }
            )

    if not rows:
        return None

    out_dir.mkdir(parents=True, exist_ok=True)
    out_path = out_dir / "results.csv"
    with open(out_path, "w", encoding="utf-8", newline="") as results_file:
        writer = csv.DictWriter(results_file, fieldnames=list(RESULTS_FIELDS))
        writer.writeheader()
        writer.writerows(rows)
    return out_path

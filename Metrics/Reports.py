# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Metrics/Reports.py
#  Purpose: Format run summaries into report strings.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from typing import Any, Dict, Optional

from Metrics.Collector import Run_Results, Run_Summary, Run_Value


_UNITS = (("h", 3_600_000.0), ("m", 60_000.0), ("s", 1000.0))


def Format_Duration(value_ms_any: Any) -> str:
    if value_ms_any is None:
        return "NA"

    value_ms_f64 = float(value_ms_any)
    if value_ms_f64 != value_ms_f64:
        return "NA"

    remaining_i64 = int(round(abs(value_ms_f64)))
    parts_list_str = []
    for unit_str, unit_ms_f64 in _UNITS:
        count_i64 = int(remaining_i64 // unit_ms_f64)
        if count_i64:
            parts_list_str.append(f"{count_i64}{unit_str}")
            remaining_i64 -= int(count_i64 * unit_ms_f64)
    if remaining_i64 or not parts_list_str:
        parts_list_str.append(f"{remaining_i64}ms")

    sign_str = "-" if value_ms_f64 < 0 else ""
    return sign_str + " ".join(parts_list_str)


def _Format_Extreme(label_str: str, run_value: Run_Value) -> str:
    job_ = run_value.job_opt
    if job_ is None:
        return f"{label_str}: {Format_Duration(run_value.value_f64)}"

    return (
        f"{label_str}: {Format_Duration(run_value.value_f64)} for {job_.Title} "
        f"({job_.runner_id_opt or job_.job_id}) size: {int(job_.kind.size_class)}GB "
        f"-> acquire: {Format_Duration(job_.acquire_duration_f64)} "
        f"-> install: {Format_Duration(job_.install_duration_f64)}"
    )


def Format_Results(results: Run_Results) -> str:
    lines_list_str = [
        f"Average time in queue: {Format_Duration(results.average.value_f64)}",
        _Format_Extreme("Best time", results.best),
        _Format_Extreme("Worst time", results.worst),
    ]
    if results.latency.count_i32:
        lines_list_str.append(
            f"Latency since creation: n={results.latency.count_i32} "
            f"p50={Format_Duration(results.latency.p50_f64)} "
            f"p90={Format_Duration(results.latency.p90_f64)} "
            f"p99={Format_Duration(results.latency.p99_f64)}"
        )
    return "\n".join(lines_list_str)


def Format_Distribution(distribution_dict: Dict[str, int]) -> str:
    body_str = ", ".join(f"{title}: {count}" for title, count in distribution_dict.items())
    return f"Kinds -> {{{body_str}}}"


def Format_Summary(summary: Run_Summary, store_name_opt: Optional[str] = None) -> str:
    name_str = store_name_opt or summary.store_kind.value

    lines_list_str = []
    lines_list_str.append(f"========================= {name_str} =========================")
    if summary.nudges_opt:
        lines_list_str.append(f"Nudged: {summary.nudges_opt}")

    for title_str, results in summary.results.items():
        lines_list_str.append(f"======= {title_str} ({results.count_i32}) =======")
        lines_list_str.append(Format_Results(results))

    if not summary.results:
        lines_list_str.append("No activities were processed.")

    return "\n".join(lines_list_str)

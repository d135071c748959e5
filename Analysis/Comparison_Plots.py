# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Analysis/Comparison_Plots.py
#  Purpose: Plot per-kind latency statistics of the stores side by side.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from pathlib import Path
from typing import Dict, List

import matplotlib.pyplot as plt
import numpy as np

from Metrics.Collector import Run_Summary


STORE_LABELS = {
    "fifo": "FIFO",
    "nudge": "Nudge",
}


def _Kind_Order(summaries_dict: Dict[str, Run_Summary]) -> List[str]:
    titles_list_str: List[str] = []
    for summary in summaries_dict.values():
        for title_str in summary.results:
            if title_str not in titles_list_str:
                titles_list_str.append(title_str)
    return titles_list_str


def Plot_Latency_Comparison(summaries_dict: Dict[str, Run_Summary], out_dir: Path) -> Path:
    out_dir.mkdir(parents=True, exist_ok=True)
    titles_list_str = _Kind_Order(summaries_dict)
    stores_list_str = list(summaries_dict.keys())

    fig, axes = plt.subplots(1, 3, figsize=(15, 4), sharey=True)
    x_arr = np.arange(len(titles_list_str))
    width_f64 = 0.8 / max(len(stores_list_str), 1)

    for ax, stat_str in zip(axes, ["best", "average", "worst"]):
        for idx, store_str in enumerate(stores_list_str):
            results_dict = summaries_dict[store_str].results
            vals = [
                float(getattr(results_dict[t], stat_str).value_f64) / 1000.0 if t in results_dict else float("nan")
                for t in titles_list_str
            ]
            ax.bar(x_arr + idx * width_f64, vals, width=width_f64, alpha=0.75,
                   label=STORE_LABELS.get(store_str, store_str))
        ax.set_xticks(x_arr + width_f64 * (len(stores_list_str) - 1) / 2.0)
        ax.set_xticklabels(titles_list_str, rotation=30, ha="right")
        ax.set_title(f"{stat_str} total time")
        ax.grid(True, axis="y", alpha=0.3)
        ax.legend(fontsize=8)

    axes[0].set_ylabel("seconds")
    plt.tight_layout()
    out_path = out_dir / "latency_comparison.png"
    plt.savefig(out_path)
    plt.close(fig)
    return out_path

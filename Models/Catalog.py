# =============================================================================
#  QUEUE NUDGING SIMULATOR (QNS)
#  Product Signature: QNS
# ------------------------------------------------------------------------------
#  File: Models/Catalog.py
#  Purpose: Define the static job-kind catalog and its default sampling weights.
#  Author: Muhammet Ali Ozturk
#  Generated: 2026-10-19
#  Environment: Python 3.9.13
# =============================================================================

from typing import Dict, Sequence, Tuple

from Core.Job import Job_Kind, Size_Class


DEFAULT_CATALOG: Tuple[Job_Kind, ...] = (
    Job_Kind(title="Tunic",             size_class=Size_Class.SMALL,  launch_time_ms=1500.0),
    Job_Kind(title="Hollow Knight",     size_class=Size_Class.SMALL,  launch_time_ms=2000.0),
    Job_Kind(title="Lost Ark",          size_class=Size_Class.MEDIUM, launch_time_ms=5000.0),
    Job_Kind(title="World of Warcraft", size_class=Size_Class.BIG,    launch_time_ms=20000.0),
)

# iteration order is the sampling order
DEFAULT_WEIGHTS: Dict[str, float] = {
    "World of Warcraft": 2.0,
    "Lost Ark": 2.0,
    "Hollow Knight": 1.0,
    "Tunic": 6.0,
}


def Catalog_By_Title(catalog_seq_job_kind: Sequence[Job_Kind]) -> Dict[str, Job_Kind]:
    return {kind.title: kind for kind in catalog_seq_job_kind}

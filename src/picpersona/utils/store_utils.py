# ------------------------------------------------------------
# Analytics storage helpers:
#   - save_result(): append one analysis record
#   - fetch_results(): read stored records back
#   - summarize_results(): aggregate counts with pandas
# ------------------------------------------------------------

import logging
from typing import Any, Dict, List, Optional

import pandas as pd

from ..config import SUPABASE_RESULTS_TABLE
from ..errors import PersistenceError
from ..models import AnalysisRecord, StatsResponse

logger = logging.getLogger(__name__)


def _raise_on_error(res: Any, action: str) -> None:
    error = getattr(res, "error", None)
    if error:
        message = getattr(error, "message", None) or str(error)
        raise PersistenceError(f"{action} failed: {message}")


def save_result(sb: Any, record: AnalysisRecord, table: str = SUPABASE_RESULTS_TABLE) -> None:
    """Insert one row; rows are never updated or deleted afterwards."""
    row = record.model_dump(mode="json")
    try:
        res = sb.table(table).insert(row).execute()
    except Exception as exc:
        raise PersistenceError(f"insert failed: {exc}") from exc
    _raise_on_error(res, "insert")
    logger.info("stored %s result (%s/%s)", record.category, record.language, record.gender)


def fetch_results(sb: Any, table: str = SUPABASE_RESULTS_TABLE) -> List[Dict[str, Any]]:
    try:
        res = sb.table(table).select("category,confidence,language,gender,created_at").execute()
    except Exception as exc:
        raise PersistenceError(f"select failed: {exc}") from exc
    _raise_on_error(res, "select")
    return res.data or []


"""
Aggregates stored records into counts per category / gender / language.

Parameters:
    rows (List[dict]):
        Records as returned by fetch_results(). Missing columns are
        tolerated; an empty list yields an all-zero summary.

Returns:
    StatsResponse
"""
def summarize_results(rows: List[Dict[str, Any]]) -> StatsResponse:
    if not rows:
        return StatsResponse(total=0)

    df = pd.DataFrame(rows)

    def counts(column: str) -> Dict[str, int]:
        if column not in df.columns:
            return {}
        return {str(k): int(v) for k, v in df[column].dropna().value_counts().sort_index().items()}

    average: Optional[float] = None
    if "confidence" in df.columns:
        conf = pd.to_numeric(df["confidence"], errors="coerce").dropna()
        if not conf.empty:
            average = round(float(conf.mean()), 4)

    return StatsResponse(
        total=len(df),
        by_category=counts("category"),
        by_gender=counts("gender"),
        by_language=counts("language"),
        average_confidence=average,
    )

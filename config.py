"""
Run settings for the analytics pipeline, read from the environment (.env supported).
"""
import os
from typing import Literal
from dotenv import load_dotenv
from pydantic import BaseModel, Field


# Environment variable -> settings field
ENV_VARS = {
    "NORTHWIND_SOURCE": "source",
    "NORTHWIND_DATA_DIR": "data_dir",
    "REPORT_OUTPUT_DIR": "output_dir",
    "LOG_DIR": "log_dir",
    "TOP_N": "top_n",
    "HIGH_VALUE_RANK_CUTOFF": "high_value_rank_cutoff",
    "LARGE_ORDER_THRESHOLD": "large_order_threshold",
    "TREND_PEAK_MONTHS": "peak_months",
}


class ReportSettings(BaseModel):
    """Where the snapshot comes from, where reports go, and the report knobs"""
    source: Literal["csv", "snowflake"] = Field("csv", description="Snapshot source")
    data_dir: str = Field("data/northwind", description="Directory holding the Northwind CSV tables")
    output_dir: str = Field("output", description="Directory for exported report CSVs")
    log_dir: str = Field("logs", description="Directory for the pipeline log file")
    top_n: int = Field(10, ge=0, description="Rows kept by the top products/customers reports")
    high_value_rank_cutoff: int = Field(10, ge=1, description="Highest order rank included in the high-value breakdown")
    large_order_threshold: int = Field(10, ge=0, description="Orders with more line items than this count as large")
    peak_months: int = Field(3, ge=0, description="Peak months reported in the run summary")

    @classmethod
    def from_env(cls) -> "ReportSettings":
        load_dotenv()
        values = {}
        for env_var, field_name in ENV_VARS.items():
            raw = os.getenv(env_var)
            if raw is None or raw.strip() == "":
                continue
            values[field_name] = raw.strip()
        if "source" in values:
            values["source"] = values["source"].lower()
        return cls(**values)

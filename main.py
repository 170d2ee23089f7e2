"""
Main orchestration script for the Northwind sales analytics pipeline.
"""
import asyncio
import logging
import sys
from pathlib import Path
from typing import Optional

from config import ReportSettings
from database import SnowflakeManager
from exporter import export_reports_to_csv
from reports import run_all_reports_async
from snapshot import Snapshot
from timeseries import monthly_buckets, peak_months

# Configure logging
def setup_logging(log_dir: str = "logs"):
    """Setup logging to both file and console"""
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    log_file = log_path / "analytics.log"

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # File handler
    file_handler = logging.FileHandler(log_file)
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(formatter)

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(logging.INFO)
    console_handler.setFormatter(formatter)

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    return root_logger

logger = logging.getLogger(__name__)


def load_snapshot(settings: ReportSettings) -> Snapshot:
    """Load the snapshot from the configured source"""
    if settings.source == "snowflake":
        db_manager = SnowflakeManager()
        db_manager.connect()
        try:
            return db_manager.load_snapshot()
        finally:
            db_manager.disconnect()
    return Snapshot.from_csv_dir(settings.data_dir)


async def main(settings: Optional[ReportSettings] = None) -> bool:
    """Main orchestration function"""
    try:
        settings = settings or ReportSettings.from_env()

        logger.info("=" * 60)
        logger.info("NORTHWIND SALES ANALYTICS - START")
        logger.info("=" * 60)

        # Step 1: Load snapshot
        logger.info(f"\n[STEP 1] LOADING SNAPSHOT ({settings.source})")
        logger.info("-" * 60)
        snapshot = load_snapshot(settings)
        for table, count in snapshot.row_counts().items():
            logger.info(f"  {table}: {count} rows")

        # Step 2: Compute reports
        logger.info("\n[STEP 2] COMPUTING REPORTS")
        logger.info("-" * 60)
        results = await run_all_reports_async(snapshot, settings)

        # Step 3: Export to CSV
        logger.info("\n[STEP 3] EXPORTING TO CSV")
        logger.info("-" * 60)
        csv_paths = export_reports_to_csv(results, settings.output_dir)
        logger.info(f"Exported {len(csv_paths)} CSV files")

        logger.info("\n" + "=" * 60)
        logger.info("PIPELINE COMPLETED SUCCESSFULLY")
        logger.info("=" * 60)
        logger.info("Summary:")
        for name, rows in results.items():
            logger.info(f"  {name}: {len(rows)} rows")

        buckets = monthly_buckets(snapshot.line_facts, snapshot.latest_order_year())
        for bucket in peak_months(buckets, settings.peak_months):
            logger.info(f"  Peak month: {bucket.month_name} {bucket.year} ({bucket.revenue:.2f})")

        return True

    except Exception as e:
        logger.error(f"Pipeline failed: {str(e)}", exc_info=True)
        return False


if __name__ == "__main__":
    run_settings = ReportSettings.from_env()
    setup_logging(run_settings.log_dir)
    success = asyncio.run(main(run_settings))
    sys.exit(0 if success else 1)

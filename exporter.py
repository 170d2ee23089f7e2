"""
CSV export of report results.
"""
import logging
import os
from typing import Any, Dict, List

from reports import report_to_dataframe

logger = logging.getLogger(__name__)


def export_reports_to_csv(results: Dict[str, List[Dict[str, Any]]], output_dir: str = "output") -> Dict[str, str]:
    """Write one <report>.csv per report, returns report name -> file path"""
    os.makedirs(output_dir, exist_ok=True)

    paths = {}
    for name, rows in results.items():
        file_path = os.path.join(output_dir, f"{name}.csv")
        try:
            report_to_dataframe(name, rows).to_csv(file_path, index=False)
        except Exception as e:
            logger.error(f"Error exporting {name}: {str(e)}")
            raise
        paths[name] = file_path
        logger.info(f"Exported {name} to {file_path}")

    return paths

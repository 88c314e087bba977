"""
================================================================================
Cruise Tools
================================================================================

Support utilities for the cruise booking test suite.

Modules:
    - common: Loguru logging setup shared by runner and pytest session
    - report_tools: Allure attachments and report processing

Example:
    from cruise_tools.common.global_config import init_logger
    from cruise_tools.report_tools.allure_utils import AllureReportProcessor

    init_logger()
    summary = AllureReportProcessor(Path("reports/allure-results")).generate_summary()

================================================================================
"""

__version__ = "1.0.0"

__all__ = [
    "common",
    "report_tools",
]

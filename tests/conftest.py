"""Shared fixtures for the dashboard data tests."""

import pytest
import structlog

from cdp_dashboard.config import set_settings
from cdp_dashboard.formatters import ChartConfig, set_chart_config


@pytest.fixture(autouse=True)
def reset_global_state():
    """Restore module-level settings, chart config and structlog after each test.

    ``configure_logging`` binds structlog to the stream that is ``sys.stderr``
    at call time, which under capsys is closed once the test ends.
    """
    yield
    set_settings(None)
    set_chart_config(ChartConfig.from_quality("medium"))
    structlog.reset_defaults()

"""
Global pytest configuration and fixtures.
"""
from typing import Dict

import pytest

from timesheet_engine.aggregators.timesheet_store import TimesheetStore
from timesheet_engine.config import TimesheetSettings, reload_config

SETTINGS_ENV_VARS = [
    'SUMMARY_API_KEY',
    'SUMMARY_API_BASE_URL',
    'SUMMARY_MODEL',
    'SUMMARY_TIMEOUT',
    'ENVIRONMENT',
    'DEBUG',
    'LOG_LEVEL',
    'MAX_RETRIES',
    'RETRY_DELAY',
    'DURATION_POLICY',
    'MAX_JOBS_PER_DAY',
    'DEFAULT_JOBS_PER_DAY',
    'TRAVEL_DEDUCTION_THRESHOLD_HOURS',
    'TRAVEL_DEDUCTION_MINUTES',
    'LUNCH_DEDUCTION_THRESHOLD_HOURS',
    'LUNCH_DEDUCTION_MINUTES',
]


@pytest.fixture(scope="session")
def test_env_vars() -> Dict[str, str]:
    """Test environment variables for configuration."""
    return {
        'SUMMARY_API_KEY': 'test-api-key',
        'SUMMARY_MODEL': 'test-model',
        'ENVIRONMENT': 'testing',
        'DEBUG': 'false',
        'LOG_LEVEL': 'DEBUG',
        'MAX_RETRIES': '0',
        'RETRY_DELAY': '0',
    }


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """Remove settings variables and run from an empty directory (no .env)."""
    for key in SETTINGS_ENV_VARS:
        # setenv first so monkeypatch also undoes values loaded from .env files
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)

    import timesheet_engine.config.settings
    timesheet_engine.config.settings._config = None

    yield

    timesheet_engine.config.settings._config = None


@pytest.fixture
def mock_env(clean_env, test_env_vars, monkeypatch):
    """Mock environment variables for testing."""
    for key, value in test_env_vars.items():
        monkeypatch.setenv(key, value)
    yield test_env_vars


@pytest.fixture
def test_config(mock_env) -> TimesheetSettings:
    """Test configuration instance."""
    return reload_config()


@pytest.fixture
def store() -> TimesheetStore:
    """Empty store with default policy and rules."""
    return TimesheetStore()


@pytest.fixture
def populated_store() -> TimesheetStore:
    """Store with two edited days in the week of 2024-06-10.

    Monday: one 540-minute job (net 450).
    Wednesday: one 300-minute job, on-call (net 270).
    """
    store = TimesheetStore()
    store.set_employee_name("Jane Doe")
    store.set_truck_number("T-42")

    monday = store.get_or_default("2024-06-10")
    store.update_job(
        "2024-06-10",
        monday.jobs[0].id,
        job_number="J-100",
        job_location="Depot",
        travel_start_time="08:00",
        work_start_time="08:30",
        work_finish_time="16:30",
        travel_home_time="17:00",
    )

    wednesday = store.get_or_default("2024-06-12")
    store.update_job(
        "2024-06-12",
        wednesday.jobs[0].id,
        job_number="J-200",
        job_location="Main St, Unit 4",
        work_start_time="09:00",
        work_finish_time="14:00",
    )
    store.set_on_call("2024-06-12", True)
    return store


# Pytest configuration for different test types
def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line(
        "markers", "unit: mark test as a unit test"
    )
    config.addinivalue_line(
        "markers", "integration: mark test as an integration test"
    )
    config.addinivalue_line(
        "markers", "api: mark test as exercising the summarization client"
    )


def pytest_collection_modifyitems(config, items):
    """Modify test collection to add markers based on location."""
    for item in items:
        if "tests/unit/" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in str(item.fspath):
            item.add_marker(pytest.mark.integration)

        if "summary_service" in str(item.fspath):
            item.add_marker(pytest.mark.api)

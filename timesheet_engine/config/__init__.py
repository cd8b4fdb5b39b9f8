"""
Configuration module for the timesheet engine.
"""
from .settings import (
    TimesheetSettings,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'TimesheetSettings',
    'get_config',
    'load_config',
    'reload_config'
]

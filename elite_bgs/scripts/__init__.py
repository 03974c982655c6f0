"""Maintenance scripts runnable from the admin API.

Each script is a coroutine function taking the session factory.
"""
from elite_bgs.scripts import sync_name_lower

SCRIPTS = {
    "sync_name_lower": sync_name_lower.run,
}

"""
opsdesk_services -- the operations layer on top of the kernel.

Validates inbound payloads, runs one unit of work per operation, and
exposes the results to transports (HTTP, CLI) as plain dicts.
"""

from opsdesk_services.dashboard import DashboardService

__all__ = [
    "DashboardService",
]

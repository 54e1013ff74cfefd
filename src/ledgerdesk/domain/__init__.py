"""Domain layer for ledgerdesk application.

Services are imported lazily: the database layer imports domain entities,
and the services import the database layer.
"""

_SERVICES = {
    "CatalogService": "ledgerdesk.domain.catalog",
    "LedgerService": "ledgerdesk.domain.ledger",
    "SnapshotService": "ledgerdesk.domain.snapshot",
    "ReportService": "ledgerdesk.domain.aggregation",
    "LedgerMirror": "ledgerdesk.domain.mirror",
}

__all__ = list(_SERVICES)


def __getattr__(name):
    if name in _SERVICES:
        from importlib import import_module

        return getattr(import_module(_SERVICES[name]), name)
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

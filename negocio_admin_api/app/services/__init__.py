"""
Service layer abstraction.

``storage_service.MemStorage`` owns all entity state in memory; the
other services read from it.  Endpoints only talk to these classes, so
the in-memory maps can later be swapped for a relational store without
touching the API handlers.
"""

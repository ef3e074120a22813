"""
Endpoint modules.

Each module defines an APIRouter for one collection.  Handlers only
translate HTTP to ``MemStorage`` calls: lookups that return ``None``
become ``404`` responses and storage ``ValueError``s about unknown
references become ``404`` as well.
"""

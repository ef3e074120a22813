"""
Pydantic schema definitions for API payloads and stored records.

Each entity (clients, orders, deliveries, etc.) defines its own models
for request bodies and stored records.  Records travel over the wire
with camelCase keys (``clientId``, ``totalValue``) while Python code
uses snake_case attributes; ``base.CamelModel`` handles the mapping.
"""

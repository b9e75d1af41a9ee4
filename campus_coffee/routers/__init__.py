"""Routers package — HTTP endpoint definitions.

Files:
  pos.py    — /api/pos/* (list, lookup, create, update, OSM import)
  admin.py  — /api/admin/* (bulk clear; mounted only when enabled in settings)

Rule: Routers only handle HTTP (request parsing, response shaping).
      All business logic delegates to campus_coffee/services/.
"""

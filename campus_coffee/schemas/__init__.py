"""Pydantic schemas package.

Folder intent:
  common.py  — CamelModel base + HealthResponse (all API schemas inherit CamelModel)
  pos.py     — PosDto, the single request/response shape of /api/pos
  osm.py     — OsmNode, parsed from the OpenStreetMap API
"""

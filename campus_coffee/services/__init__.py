"""Services package — all business logic lives here, never in routers.

Files:
  pos.py          — POS create/update/lookup and the OpenStreetMap import
  osm_service.py  — httpx client for the OpenStreetMap API

Rule: routers call services, services call repositories, repositories call the DB.
      No SQLAlchemy queries in routers. No FastAPI imports in services.
"""

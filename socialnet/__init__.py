"""Social feed API package.

Holds the domain model, the application use cases and the infrastructure
(persistence, realtime sessions, media storage) behind the FastAPI surface
created in ``main.py``.
"""

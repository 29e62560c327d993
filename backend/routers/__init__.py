# backend/routers/__init__.py

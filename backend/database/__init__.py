# backend/database/__init__.py

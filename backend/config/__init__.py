# backend/config/__init__.py

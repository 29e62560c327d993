# backend/gateway/__init__.py

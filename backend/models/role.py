# backend/models/role.py
import enum


class Role(str, enum.Enum):
    """Closed set of principal roles. Admin carries every worker capability."""

    ADMIN = "admin"
    WORKER = "worker"

    def grants(self, other: "Role") -> bool:
        """True when a principal holding ``self`` may act as ``other``."""
        if self is other:
            return True
        return self is Role.ADMIN and other is Role.WORKER

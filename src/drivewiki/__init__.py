"""Navigation tree and document outline for a Drive-backed wiki."""

from drivewiki.api import DriveApi
from drivewiki.protocols import ApiProtocol, StoreProtocol
from drivewiki.session import NavigationSession
from drivewiki.store import DriveStore

__all__ = ["ApiProtocol", "DriveApi", "DriveStore", "NavigationSession", "StoreProtocol"]

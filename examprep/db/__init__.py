from examprep.db.state_store import StateStore

__all__ = ["StateStore"]

from linkedin_api.db.database import Database

__all__ = ["Database"]

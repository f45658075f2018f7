"""Media Asset Deletion Service Package."""

__version__ = "1.0.0"
__description__ = (
    "Serverless deletion of media assets stored in R2 or Telegram, "
    "with metadata kept in a key-value table"
)

__all__ = ["handlers", "core"]

from aws_utils.records.store import RecordStore

__all__ = ["RecordStore"]

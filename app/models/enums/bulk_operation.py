import enum


class BulkOperation(str, enum.Enum):
    archive = "archive"
    restore = "restore"
    delete = "delete"
    permanently_delete = "permanently_delete"
    update = "update"

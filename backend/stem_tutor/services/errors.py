"""
STEM Tutor - Service Errors
Raised by the resource services and mapped to HTTP statuses by the routers
"""


class ResourceError(Exception):
    """Base resource service error."""
    pass


class MissingFieldsError(ResourceError):
    """One or more required fields were absent or empty on create or update."""
    
    def __init__(self, fields: list[str]):
        self.fields = list(fields)
        super().__init__(f"Missing required fields: {', '.join(self.fields)}")


class RecordNotFoundError(ResourceError):
    """No record with the given id exists in the collection."""
    
    def __init__(self, collection: str, record_id: str):
        self.collection = collection
        self.record_id = record_id
        super().__init__(f"{collection} record {record_id!r} not found")


def missing_fields(payload: dict, required: tuple[str, ...]) -> list[str]:
    """Required keys whose value is absent, null or blank."""
    missing = []
    for field in required:
        value = payload.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            missing.append(field)
    return missing

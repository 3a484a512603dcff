from bson import ObjectId
from datetime import datetime


# Recursive function to serialize documents with non-serializable types
def json_converter(obj):
    if isinstance(obj, dict):
        return {key: json_converter(value) for key, value in obj.items()}
    elif isinstance(obj, list):
        return [json_converter(value) for value in obj]
    elif isinstance(obj, ObjectId):
        return str(obj)
    elif isinstance(obj, datetime):
        return obj.isoformat()
    return obj


def rename_id_field(document):
    """Rename _id to id (as a string) in a Mongo document."""
    if document and "_id" in document:
        document["id"] = str(document["_id"])
        del document["_id"]
    return document

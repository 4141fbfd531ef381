import jsonschema

from .schema_loader import load_schema


def validate_element_document(data: dict) -> None:
    """Validate an element document dict against ElementDocument.v1.json.

    Raises jsonschema.ValidationError if non-conformant.
    """
    jsonschema.validate(data, load_schema("ElementDocument.v1.json"))


def validate_items_document(data: dict) -> None:
    """Validate an exported items dict against SpeakableItems.v1.json.

    Raises jsonschema.ValidationError if non-conformant.
    """
    jsonschema.validate(data, load_schema("SpeakableItems.v1.json"))

# restaurant_api/routers/forms.py
#
# Multipart product forms carry their fields as a JSON string in "data".

import json

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from restaurant_api.core.errors import ValidationError


def parse_json_form(model: type[BaseModel], raw: str | None):
    try:
        return model.model_validate_json(raw or "{}")
    except PydanticValidationError as exc:
        raise ValidationError(
            "Incorrect data",
            details=json.loads(exc.json(include_url=False)),
        )

from typing import Any, Dict, Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """JSON bodies use camelCase; Python code uses the snake_case field names"""

    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class MessageOut(BaseModel):
    message: str
    details: Optional[Dict[str, Any]] = None

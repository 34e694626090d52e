import json
from datetime import datetime
from enum import Enum
from typing import Any
from urllib.parse import urlencode

import pydantic
from pydantic import ConfigDict


def pretty_json(model: pydantic.BaseModel, **kwargs: Any) -> str:
    data = model.model_dump(mode="json", exclude_none=True, by_alias=True, **kwargs)
    return json.dumps(data, sort_keys=True, indent=4)


class MetaBase(pydantic.BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    def json(self, **kwargs: Any) -> str:
        for k in ["exclude_none", "by_alias", "mode"]:
            if k in kwargs:
                del kwargs[k]

        return pretty_json(self, **kwargs)


class APIQuery(MetaBase):
    def to_query(self):
        set_parts: dict[str, Any] = {}
        for key, value in self.model_dump().items():
            if value is not None:
                if isinstance(value, Enum):
                    set_parts[key] = value.value
                elif isinstance(value, list):
                    if len(value) > 0:  # type: ignore
                        set_parts[key] = value
                elif isinstance(value, datetime):
                    set_parts[key] = value.isoformat()
                else:
                    set_parts[key] = value
        return urlencode(set_parts, doseq=True)

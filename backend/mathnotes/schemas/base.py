# backend/mathnotes/schemas/base.py
from pydantic import BaseModel, ConfigDict

class BaseSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

class NameMixin(BaseModel):
    name: str

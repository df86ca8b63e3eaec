from pydantic import BaseModel, Field
from typing import List


class CategoryDefinition(BaseModel):
    name: str
    subcategories: List[str] = []


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)


class SubcategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)

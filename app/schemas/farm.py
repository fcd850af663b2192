from typing import List

from app.schemas.base import BaseSchema


class FarmFilters(BaseSchema):
    search_text: str = ""
    selected_farm_filters: List[str] = []

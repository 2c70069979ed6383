"""Request and response bodies for the chat API."""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from parts_agent.memory.models import ProductReference


class ChatRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    message: str = Field(min_length=1, description="User message text.")
    conversation_id: str = Field(
        alias="conversationId",
        min_length=1,
        description="Opaque conversation identifier chosen by the client.",
    )


class ChatResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str
    product_cards: Optional[List[ProductReference]] = Field(default=None, alias="productCards")
    conversation_id: str = Field(alias="conversationId")


class PartResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    part_number: str = Field(alias="partNumber")
    name: str
    price: str
    category: str
    description: str = ""
    compatibility: List[str] = Field(default_factory=list)
    image_url: str = Field(default="", alias="imageUrl")
    buy_link: Optional[str] = Field(default=None, alias="buyLink")
    in_stock: bool = Field(default=True, alias="inStock")

"""
Schemas - Message Attachments

Structured, non-text payloads carried by an assistant message for rich
rendering. The `type` field discriminates the variants.
"""
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field

BadgeVariant = Literal["success", "error", "warning", "info", "neutral", "primary"]


class ListItem(BaseModel):
    id: str
    label: str
    description: Optional[str] = None
    badge: Optional[str] = None
    badge_variant: Optional[BadgeVariant] = None
    href: Optional[str] = None
    icon: Optional[str] = None


class ListAttachment(BaseModel):
    type: Literal["list"] = "list"
    title: str
    items: List[ListItem] = Field(default_factory=list)
    empty_text: Optional[str] = None


class CardField(BaseModel):
    label: str
    value: str


class CardAttachment(BaseModel):
    type: Literal["card"] = "card"
    title: str
    fields: List[CardField] = Field(default_factory=list)


class StatItem(BaseModel):
    label: str
    value: Union[int, float, str]
    trend: Optional[Literal["up", "down", "neutral"]] = None


class StatsAttachment(BaseModel):
    type: Literal["stats"] = "stats"
    title: str
    stats: List[StatItem] = Field(default_factory=list)


class NavLink(BaseModel):
    label: str
    href: str
    icon: Optional[str] = None
    description: Optional[str] = None


class NavigationAttachment(BaseModel):
    type: Literal["navigation"] = "navigation"
    links: List[NavLink] = Field(default_factory=list)


class ConfirmAttachment(BaseModel):
    """Confirmation prompt rendered before a flow's action is executed."""
    type: Literal["confirm"] = "confirm"
    title: str
    description: str
    confirm_label: str = "Oui, confirmer"
    cancel_label: str = "Non, annuler"
    action_id: str
    payload: Dict[str, str] = Field(default_factory=dict)


MessageAttachment = Annotated[
    Union[
        ListAttachment,
        CardAttachment,
        StatsAttachment,
        NavigationAttachment,
        ConfirmAttachment,
    ],
    Field(discriminator="type"),
]

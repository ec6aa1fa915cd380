from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class ClerkEmailAddress(BaseModel):
    id: str
    email_address: str


class ClerkUserData(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None
    primary_email_address_id: Optional[str] = None
    email_addresses: List[ClerkEmailAddress] = []

    @property
    def full_name(self) -> Optional[str]:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or None

    @property
    def primary_email(self) -> Optional[str]:
        for address in self.email_addresses:
            if address.id == self.primary_email_address_id:
                return address.email_address
        return self.email_addresses[0].email_address if self.email_addresses else None


class ClerkWebhookEvent(BaseModel):
    type: str
    object: str = "event"
    data: Dict[str, Any]
    timestamp: Optional[int] = None

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional

from quild.schemas.user import IdentityProfile

class EmailAddress(BaseModel):
    email_address: str

class IdentityUserData(BaseModel):
    id: str
    email_addresses: List[EmailAddress] = Field(default_factory=list)
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    image_url: Optional[str] = None

    def to_profile(self) -> IdentityProfile:
        email = self.email_addresses[0].email_address if self.email_addresses else ""
        return IdentityProfile(
            external_id=self.id,
            email=email,
            first_name=self.first_name,
            last_name=self.last_name,
            photo=self.image_url,
        )

class IdentityEvent(BaseModel):
    type: str
    data: Dict[str, Any] = Field(default_factory=dict)

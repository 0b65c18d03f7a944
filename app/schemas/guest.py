"""
Guest-related Pydantic schemas
"""

from typing import Any, Dict, Optional
from pydantic import BaseModel
from pydantic.alias_generators import to_camel

from app.utils.identifiers import normalize_id

class GuestRecord(BaseModel):
    """A guest as held by both replicas.

    Two records are equal when their ids match; compare ``model_dump()``
    output for full-field equality. Remote documents use camelCase keys
    (``phoneNumber``, ``hasLanyard``...) and carry the id as the document id.
    """
    id: str = ""
    name: str
    email: str = ""
    phone_number: str = ""
    company_name: str = ""
    attending: bool = False
    has_lanyard: bool = False
    has_gift: bool = False
    has_food_coupon: bool = False
    remarks: Optional[str] = None
    payment_mode: Optional[str] = None
    amount: Optional[str] = None
    category: Optional[str] = None
    deleted: bool = False
    
    class Config:
        alias_generator = to_camel
        populate_by_name = True
    
    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GuestRecord):
            return NotImplemented
        return self.id == other.id
    
    def __hash__(self) -> int:
        return hash(self.id)
    
    def with_normalized_id(self) -> "GuestRecord":
        return self.model_copy(update={"id": normalize_id(self.name)})
    
    def to_document(self) -> Dict[str, Any]:
        """Document body for the remote collection"""
        return self.model_dump(by_alias=True, exclude={"id"})
    
    @classmethod
    def from_document(cls, doc_id: str, data: Dict[str, Any]) -> "GuestRecord":
        """Build a record from a remote document; the document id wins over any body id"""
        body = {key: value for key, value in (data or {}).items() if value is not None}
        body["id"] = doc_id
        body.setdefault("name", doc_id)
        return cls.model_validate(body)

class GuestCreate(BaseModel):
    """Schema for creating a guest"""
    name: str
    email: str = ""
    phone_number: str = ""
    company_name: str = ""
    attending: bool = False
    has_lanyard: bool = False
    has_gift: bool = False
    has_food_coupon: bool = False
    remarks: Optional[str] = None
    payment_mode: Optional[str] = None
    amount: Optional[str] = None
    category: Optional[str] = None

class GuestUpdate(BaseModel):
    """Schema for updating a guest"""
    name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    company_name: Optional[str] = None
    attending: Optional[bool] = None
    has_lanyard: Optional[bool] = None
    has_gift: Optional[bool] = None
    has_food_coupon: Optional[bool] = None
    remarks: Optional[str] = None
    payment_mode: Optional[str] = None
    amount: Optional[str] = None
    category: Optional[str] = None

class GuestSummary(BaseModel):
    """Aggregates over the visible guest list"""
    total: int = 0
    attending: int = 0
    yet_to_attend: int = 0
    gifts: int = 0
    food_coupons: int = 0
    lanyards: int = 0
    categories: Dict[str, int] = {}

"""
Guest model
"""

from sqlalchemy import Column, String, Boolean

from app.core.db import Base
from app.schemas.guest import GuestRecord

class Guest(Base):
    __tablename__ = "guests"
    
    id = Column(String(255), primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), default="")
    phone_number = Column(String(100), default="")
    company_name = Column(String(255), default="")
    attending = Column(Boolean, default=False)
    has_lanyard = Column(Boolean, default=False)
    has_gift = Column(Boolean, default=False)
    has_food_coupon = Column(Boolean, default=False)
    remarks = Column(String(1024), nullable=True)
    payment_mode = Column(String(100), nullable=True)
    amount = Column(String(100), nullable=True)
    category = Column(String(100), nullable=True)
    deleted = Column(Boolean, default=False, index=True)
    
    @classmethod
    def from_record(cls, record: GuestRecord) -> "Guest":
        return cls(**record.model_dump())
    
    def to_record(self) -> GuestRecord:
        return GuestRecord(
            id=self.id,
            name=self.name,
            email=self.email or "",
            phone_number=self.phone_number or "",
            company_name=self.company_name or "",
            attending=bool(self.attending),
            has_lanyard=bool(self.has_lanyard),
            has_gift=bool(self.has_gift),
            has_food_coupon=bool(self.has_food_coupon),
            remarks=self.remarks,
            payment_mode=self.payment_mode,
            amount=self.amount,
            category=self.category,
            deleted=bool(self.deleted),
        )

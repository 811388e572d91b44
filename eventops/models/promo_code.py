# eventops/models/promo_code.py
from sqlalchemy import Column, String, Boolean, DateTime, Integer, ForeignKey, Text
from sqlalchemy.orm import relationship
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class PromoCode(Base):
    __tablename__ = "promo_codes"

    id = Column(
        String, primary_key=True, default=lambda: f"promo_{uuid.uuid4().hex[:12]}"
    )
    organizer_id = Column(String, ForeignKey("users.id"), nullable=False, index=True)
    # NULL = valid for every event of the organizer
    event_id = Column(
        String, ForeignKey("events.id", ondelete="CASCADE"), nullable=True, index=True
    )
    code = Column(String(50), nullable=False, index=True)
    description = Column(Text, nullable=True)
    discount_type = Column(String(20), nullable=False)  # 'percentage' or 'fixed'
    discount_value = Column(Integer, nullable=False)  # percentage (1-100) or fixed amount in cents

    # Usage limits
    max_uses = Column(Integer, nullable=True)  # NULL = unlimited
    used_count = Column(Integer, nullable=False, default=0)
    max_uses_per_email = Column(Integer, nullable=True)

    min_order_amount = Column(Integer, nullable=True)  # cents

    # Validity period
    valid_from = Column(DateTime(timezone=True), nullable=True)
    valid_until = Column(DateTime(timezone=True), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=True, onupdate=utcnow)

    usages = relationship(
        "PromoCodeUsage", back_populates="promo_code", cascade="all, delete-orphan"
    )

    @property
    def remaining_uses(self):
        """Remaining uses, or None if unlimited."""
        if self.max_uses is None:
            return None
        return max(0, self.max_uses - self.used_count)

    @property
    def discount_formatted(self) -> str:
        """Formatted discount string (e.g., '20%' or '$10.00')."""
        if self.discount_type == "percentage":
            return f"{self.discount_value}%"
        return f"${self.discount_value / 100:.2f}"


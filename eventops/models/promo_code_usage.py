# eventops/models/promo_code_usage.py
from sqlalchemy import Column, String, DateTime, Integer, ForeignKey
from sqlalchemy.orm import relationship
from eventops.db.base_class import Base
from eventops.utils.time_utils import utcnow
import uuid


class PromoCodeUsage(Base):
    """One redemption of a promo code on an order."""
    __tablename__ = "promo_code_usages"

    id = Column(
        String, primary_key=True, default=lambda: f"pcu_{uuid.uuid4().hex[:12]}"
    )
    promo_code_id = Column(
        String,
        ForeignKey("promo_codes.id", ondelete="CASCADE"),
        nullable=False,
        index=True
    )
    order_id = Column(String, nullable=False, index=True)
    buyer_email = Column(String(255), nullable=True, index=True)
    discount_applied = Column(Integer, nullable=False)  # cents
    used_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    promo_code = relationship("PromoCode", back_populates="usages")

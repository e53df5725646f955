# villagestay/db/models.py

from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Date,
    Text,
    ForeignKey,
    Numeric,
    Boolean,
    Float,
    JSON,
    CheckConstraint,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from villagestay.db.base import Base


class BookingStatus:
    PENDING = "PENDING"
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"

    ALL = (PENDING, CONFIRMED, CANCELLED, COMPLETED)
    # statuses that hold the dates of a homestay
    BLOCKING = (PENDING, CONFIRMED)


class MessageStatus:
    UNREAD = "UNREAD"
    READ = "READ"
    REPLIED = "REPLIED"

    ALL = (UNREAD, READ, REPLIED)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    phone = Column(String(32), nullable=True)

    # DB column name: password_hash
    # Python attribute: hashed_password
    hashed_password = Column("password_hash", String(255), nullable=False)

    # "user" | "admin"
    role = Column(String(20), nullable=False, default="user")
    image = Column(String(500), nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    bookings = relationship(
        "Booking",
        back_populates="user",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )

    reviews = relationship(
        "Review",
        back_populates="user",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )

    posts = relationship("Post", back_populates="author")

    refresh_tokens = relationship(
        "UserRefreshToken",
        back_populates="user",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )


class Homestay(Base):
    __tablename__ = "homestays"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(100), nullable=False)
    slug = Column(String(100), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    address = Column(String(200), nullable=False)

    price_per_night = Column(Numeric(12, 2), nullable=False)
    max_guests = Column(Integer, nullable=False, default=1)

    # list[str] as JSON in DB
    photos = Column(JSON, nullable=False, default=list)
    facilities = Column(JSON, nullable=False, default=list)

    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    maps_embed_code = Column(Text, nullable=True)

    featured = Column(Boolean, nullable=False, default=False)
    published = Column(Boolean, nullable=False, default=False, index=True)

    # bumped inside the booking transaction; the UPDATE is what locks the row
    lock_version = Column(Integer, nullable=False, default=0)

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    bookings = relationship(
        "Booking",
        back_populates="homestay",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )

    reviews = relationship(
        "Review",
        back_populates="homestay",
        cascade="all,delete-orphan",
        passive_deletes=True,
    )


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        CheckConstraint("check_in_date < check_out_date", name="ck_bookings_date_order"),
        CheckConstraint("number_of_guests >= 1", name="ck_bookings_guests_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    homestay_id = Column(
        Integer,
        ForeignKey("homestays.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    check_in_date = Column(Date, nullable=False)
    check_out_date = Column(Date, nullable=False)
    number_of_guests = Column(Integer, nullable=False)
    total_price = Column(Numeric(14, 2), nullable=False)
    notes = Column(Text, nullable=True)

    status = Column(
        String(20),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    user = relationship("User", back_populates="bookings")
    homestay = relationship("Homestay", back_populates="bookings")


class Review(Base):
    __tablename__ = "reviews"
    __table_args__ = (
        UniqueConstraint("user_id", "homestay_id", name="uq_reviews_user_homestay"),
        CheckConstraint("rating >= 1 AND rating <= 5", name="ck_reviews_rating_range"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    homestay_id = Column(
        Integer,
        ForeignKey("homestays.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    rating = Column(Integer, nullable=False)
    comment = Column(Text, nullable=False, default="")
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="reviews")
    homestay = relationship("Homestay", back_populates="reviews")


class Category(Base):
    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    slug = Column(String(120), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)

    posts = relationship("Post", back_populates="category")


class Post(Base):
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(Text, nullable=True)
    cover_image = Column(String(500), nullable=True)
    published = Column(Boolean, nullable=False, default=False, index=True)

    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    category_id = Column(
        Integer,
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )

    author = relationship("User", back_populates="posts")
    category = relationship("Category", back_populates="posts")


class Attraction(Base):
    __tablename__ = "attractions"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    photos = Column(JSON, nullable=False, default=list)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    maps_embed_code = Column(Text, nullable=True)
    featured = Column(Boolean, nullable=False, default=False)
    published = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class Culinary(Base):
    __tablename__ = "culinary"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    slug = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=False)
    location = Column(String(255), nullable=False)
    photos = Column(JSON, nullable=False, default=list)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    price_range = Column(String(100), nullable=True)
    maps_embed_code = Column(Text, nullable=True)
    featured = Column(Boolean, nullable=False, default=False)
    published = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class ContactInfo(Base):
    __tablename__ = "contact_info"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    address = Column(String(500), nullable=False)
    maps_embed_code = Column(Text, nullable=True)
    updated_at = Column(
        DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False
    )


class ContactMessage(Base):
    __tablename__ = "contact_messages"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False)
    subject = Column(String(200), nullable=False)
    message = Column(Text, nullable=False)
    status = Column(
        String(20),
        nullable=False,
        default=MessageStatus.UNREAD,
        index=True,
    )
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)


class UserRefreshToken(Base):
    __tablename__ = "user_refresh_tokens"

    id = Column(Integer, primary_key=True, index=True)

    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    token = Column(Text, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    revoked = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="refresh_tokens")

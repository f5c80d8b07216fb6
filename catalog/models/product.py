from sqlalchemy import Float, String
from sqlalchemy.orm import Mapped, mapped_column

from catalog.extensions import db


class Product(db.Model):
    __tablename__ = "products"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str | None] = mapped_column(String(255))
    main_title: Mapped[str | None] = mapped_column("mainTitle", String(255))
    sub_title: Mapped[str | None] = mapped_column("subTitle", String(255))
    price: Mapped[float | None] = mapped_column(Float)
    mrp: Mapped[float | None] = mapped_column(Float)
    image: Mapped[str | None] = mapped_column(String(512))
    rating: Mapped[float | None] = mapped_column(Float)
    reviews: Mapped[int | None] = mapped_column()
    weight: Mapped[str | None] = mapped_column(String(50))
    category: Mapped[str | None] = mapped_column(String(100))

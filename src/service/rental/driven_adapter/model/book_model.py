from decimal import Decimal

from sqlalchemy import CheckConstraint, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from src.platform.database.orm_db_setting import Base


class BookModel(Base):
    __tablename__ = 'book'
    __table_args__ = (
        CheckConstraint(
            'available_quantity >= 0 AND available_quantity <= stock_quantity',
            name='ck_book_available_within_stock',
        ),
    )

    external_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    author: Mapped[str] = mapped_column(String(255), nullable=False, default='')
    price: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)
    stock_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    available_quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self):
        return (
            f'<BookModel(external_id={self.external_id}, title={self.title}, '
            f'available={self.available_quantity}/{self.stock_quantity})>'
        )

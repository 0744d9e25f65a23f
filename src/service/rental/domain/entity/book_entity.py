from decimal import Decimal

import attrs


@attrs.define(frozen=True)
class Book:
    external_id: int
    title: str
    price: Decimal
    stock_quantity: int
    available_quantity: int
    author: str = ''

    @property
    def is_available(self) -> bool:
        return self.available_quantity > 0

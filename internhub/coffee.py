"""Coffee orders: flavors interned by name, table numbers kept per order."""

from dataclasses import dataclass
from typing import Optional

from internhub.intern_table import InternTable


@dataclass(frozen=True)
class CoffeeOrderContext:
    table: int


@dataclass(frozen=True)
class CoffeeFlavor:
    flavor: str

    def serve(self, context: CoffeeOrderContext) -> str:
        return f"Serving Coffee flavor {self.flavor} to table number {context.table}"


class CoffeeFlavorFactory:
    """One CoffeeFlavor per flavor name, however many orders reference it."""

    def __init__(self, table: Optional[InternTable[str, CoffeeFlavor]] = None) -> None:
        self._table: InternTable[str, CoffeeFlavor] = (
            table if table is not None else InternTable("coffee_flavors")
        )

    def get_coffee_flavor(self, name: str) -> CoffeeFlavor:
        return self._table.get_or_create(name, lambda: CoffeeFlavor(name))

    def total_flavors_made(self) -> int:
        return self._table.size()

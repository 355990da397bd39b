from dataclasses import dataclass
from typing import List

DEFAULT_SYMBOLS = ("MSFT", "IBM", "AAPL", "GOOG", "AMZN")


@dataclass(frozen=True)
class QuoteRecord:
    symbol: str
    company: str
    price: str
    change: str

    def as_row(self) -> List[str]:
        return [self.company, self.price, self.change]

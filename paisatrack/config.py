"""Runtime settings.

Storage keys and display constants live here so nothing else hardcodes them.
The data directory can be moved with the ``PAISATRACK_DATA_DIR`` environment
variable.
"""

import os
from dataclasses import dataclass
from pathlib import Path

TRANSACTIONS_KEY = "PaisaTrackTransactions"
BUDGETS_KEY = "PaisaTrackBudgets"

_PROJECT_ROOT = Path(__file__).parent.parent.resolve()


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _PROJECT_ROOT / "data"
    transactions_key: str = TRANSACTIONS_KEY
    budgets_key: str = BUDGETS_KEY
    currency_symbol: str = "₹"
    recent_limit: int = 5
    cash_flow_months: int = 6

    @property
    def collection_keys(self) -> dict[str, str]:
        return {
            "transactions": self.transactions_key,
            "budgets": self.budgets_key,
        }


def load_settings() -> Settings:
    data_dir = os.getenv("PAISATRACK_DATA_DIR")
    if data_dir:
        return Settings(data_dir=Path(data_dir).expanduser().resolve())
    return Settings()

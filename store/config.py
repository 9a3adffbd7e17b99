"""
Store Config - Deployment Settings
====================================
Settings that vary per store rather than per sale: the name printed on
receipts and the currency/locale used to render money.

Values come from the environment when present:

    STORE_NAME      receipt header        (default "BridgePhase Convenience Store")
    STORE_CURRENCY  ISO 4217 code         (default "USD")
    STORE_LOCALE    babel locale name     (default "en_US")
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from store.errors import InvalidArgumentError

DEFAULT_STORE_NAME = "BridgePhase Convenience Store"
DEFAULT_CURRENCY = "USD"
DEFAULT_LOCALE = "en_US"


@dataclass(frozen=True)
class StoreSettings:
    store_name: str = DEFAULT_STORE_NAME
    currency: str = DEFAULT_CURRENCY
    locale: str = DEFAULT_LOCALE

    def __post_init__(self) -> None:
        if not self.store_name or not isinstance(self.store_name, str):
            raise InvalidArgumentError("store_name must be a non-empty string.")
        if (
            not isinstance(self.currency, str)
            or len(self.currency) != 3
            or not self.currency.isalpha()
        ):
            raise InvalidArgumentError(
                f"currency must be 3-letter ISO 4217 code, "
                f"got '{self.currency}'."
            )
        object.__setattr__(self, "currency", self.currency.upper())
        if not self.locale or not isinstance(self.locale, str):
            raise InvalidArgumentError("locale must be a non-empty string.")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> StoreSettings:
        env = os.environ if environ is None else environ
        return cls(
            store_name=env.get("STORE_NAME", DEFAULT_STORE_NAME),
            currency=env.get("STORE_CURRENCY", DEFAULT_CURRENCY),
            locale=env.get("STORE_LOCALE", DEFAULT_LOCALE),
        )

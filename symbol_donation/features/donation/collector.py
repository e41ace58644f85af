"""Discovery of the transferable assets of an account."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Mapping

from symbol_donation.features.donation.models import Asset, AssetKind
from symbol_donation.features.donation.reservation import (
    DEFAULT_NATIVE_RESERVE,
    sendable,
)
from symbol_donation.shared.protocols import (
    AccountContext,
    BalanceReader,
    NotificationSink,
    TokenBalanceReader,
)

logger = logging.getLogger(__name__)

NATIVE_SYMBOL = "XYM"
NATIVE_DECIMALS = 6


def estimate_usd_value(
    amount: int, decimals: int, symbol: str, prices: Mapping[str, float]
) -> float:
    price = prices.get(symbol.upper(), 0.0)
    if not price:
        return 0.0
    return float(Decimal(amount).scaleb(-decimals) * Decimal(str(price)))


class AssetBalanceCollector:
    """Reads balances and returns the assets to transfer, highest value first."""

    def __init__(
        self,
        balance_reader: BalanceReader,
        notify: NotificationSink,
        reserve: int = DEFAULT_NATIVE_RESERVE,
        prices: Mapping[str, float] | None = None,
        include_tokens: bool = True,
        native_symbol: str = NATIVE_SYMBOL,
        native_decimals: int = NATIVE_DECIMALS,
    ):
        self.balance_reader = balance_reader
        self.notify = notify
        self.reserve = reserve
        self.prices = {key.upper(): value for key, value in (prices or {}).items()}
        self.include_tokens = include_tokens
        self.native_symbol = native_symbol
        self.native_decimals = native_decimals
        self.last_error: Exception | None = None

    async def collect(self, account: AccountContext) -> list[Asset]:
        self.last_error = None
        try:
            assets = await self._read_assets(account)
        except Exception as e:
            logger.error("Error fetching balances for %s: %s", account.address, e)
            self.last_error = e
            self.notify("Error", "Failed to fetch wallet balances", destructive=True)
            return []

        # sorted() is stable, so equal valuations keep read order.
        ranked = sorted(assets, key=lambda asset: asset.usd_value, reverse=True)
        logger.info(
            "Collected %d transferable assets for %s", len(ranked), account.address
        )
        return ranked

    async def _read_assets(self, account: AccountContext) -> list[Asset]:
        balance = await self.balance_reader.get_native_balance(account)

        tokens: list[Asset] = []
        if self.include_tokens and isinstance(self.balance_reader, TokenBalanceReader):
            for token in await self.balance_reader.get_token_balances(account):
                if token.amount <= 0:
                    continue
                tokens.append(
                    Asset(
                        kind=AssetKind.FUNGIBLE_TOKEN,
                        address=token.token_address,
                        symbol=token.symbol,
                        decimals=token.decimals,
                        amount=token.amount,
                        usd_value=estimate_usd_value(
                            token.amount, token.decimals, token.symbol, self.prices
                        ),
                    )
                )

        # Every token transfer also pays its fee in the native currency.
        reserve = self.reserve * (1 + len(tokens))
        amount = sendable(balance, reserve)
        logger.debug(
            "Native balance %d, reserve %d for %d transfers, sendable %d",
            balance,
            reserve,
            1 + len(tokens),
            amount,
        )

        assets: list[Asset] = []
        if amount > 0:
            assets.append(
                Asset(
                    kind=AssetKind.NATIVE,
                    symbol=self.native_symbol,
                    decimals=self.native_decimals,
                    amount=amount,
                    usd_value=estimate_usd_value(
                        amount, self.native_decimals, self.native_symbol, self.prices
                    ),
                )
            )
        return assets + tokens

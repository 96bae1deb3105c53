"""Per-currency order volume limits.

Snapshot of the exchange's GetOrderMinimumVolumes and volume decimal tables.
Clients can override entries, or load both tables from a JSON file shaped as::

    {"minVolumes": {"Xbt": "0.0001"}, "volumeDecimals": {"Xbt": 8}}
"""

import logging
from decimal import Decimal
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

import orjson

from independent_reserve.errors import UnknownCurrencyError, ValidationError
from independent_reserve.types import NumericInput

log = logging.getLogger(__name__)

DEFAULT_MIN_VOLUMES: Mapping[str, Decimal] = MappingProxyType(
    {
        "Xbt": Decimal("0.0001"),
        "Bch": Decimal("0.001"),
        "Eth": Decimal("0.001"),
        "Ltc": Decimal("0.01"),
        "Xrp": Decimal("1"),
        "Zrx": Decimal("1"),
        "Eos": Decimal("0.1"),
        "Xlm": Decimal("10"),
        "Bat": Decimal("1"),
        "Usdt": Decimal("1"),
        "Etc": Decimal("0.01"),
        "Link": Decimal("0.1"),
        "Usdc": Decimal("1"),
        "Mkr": Decimal("0.001"),
        "Dai": Decimal("1"),
        "Comp": Decimal("0.001"),
        "Snx": Decimal("0"),
        "Yfi": Decimal("0.0001"),
        "Aave": Decimal("0.01"),
        "Grt": Decimal("1"),
        "Dot": Decimal("0.1"),
        "Uni": Decimal("0.1"),
        "Ada": Decimal("1"),
        "Matic": Decimal("0.1"),
        "Doge": Decimal("1"),
        "Sol": Decimal("0.01"),
        "Mana": Decimal("0.1"),
        "Sand": Decimal("0.1"),
    }
)

DEFAULT_VOLUME_DECIMALS: Mapping[str, int] = MappingProxyType(
    {
        "Xbt": 8,
        "Bch": 8,
        "Eth": 8,
        "Ltc": 8,
        "Xrp": 5,
        "Zrx": 4,
        "Eos": 4,
        "Xlm": 5,
        "Bat": 5,
        "Usdt": 5,
        "Etc": 8,
        "Link": 4,
        "Usdc": 5,
        "Mkr": 8,
        "Dai": 5,
        "Comp": 8,
        "Snx": 5,
        "Yfi": 8,
        "Aave": 5,
        "Grt": 5,
        "Dot": 5,
        "Uni": 5,
        "Ada": 5,
        "Matic": 5,
        "Doge": 5,
        "Sol": 5,
        "Mana": 5,
        "Sand": 5,
    }
)


class VolumeTables:
    """Read-only minimum volume and volume decimals lookup."""

    def __init__(
        self,
        min_volumes: Mapping[str, NumericInput] | None = None,
        volume_decimals: Mapping[str, int] | None = None,
    ):
        """Build the tables from the defaults with ``min_volumes`` and
        ``volume_decimals`` entries layered on top.
        """
        merged_min = dict(DEFAULT_MIN_VOLUMES)
        for currency, volume in (min_volumes or {}).items():
            try:
                merged_min[currency] = Decimal(str(volume))
            except ArithmeticError as e:
                raise ValidationError(
                    f"Invalid minimum volume {volume!r} for {currency}"
                ) from e

        merged_decimals = dict(DEFAULT_VOLUME_DECIMALS)
        for currency, decimals in (volume_decimals or {}).items():
            if isinstance(decimals, bool) or not isinstance(decimals, int):
                raise ValidationError from TypeError(
                    f"Unexpected type for volume decimals of {currency} {type(decimals)}"
                )
            merged_decimals[currency] = decimals

        self._min_volumes = MappingProxyType(merged_min)
        self._volume_decimals = MappingProxyType(merged_decimals)

    @property
    def min_volumes(self) -> Mapping[str, Decimal]:
        return self._min_volumes

    @property
    def volume_decimals(self) -> Mapping[str, int]:
        return self._volume_decimals

    def min_volume_for(self, currency: str) -> Decimal:
        try:
            return self._min_volumes[currency]
        except KeyError:
            raise UnknownCurrencyError("Min volume", currency) from None

    def volume_decimals_for(self, currency: str) -> int:
        try:
            return self._volume_decimals[currency]
        except KeyError:
            raise UnknownCurrencyError("Volume decimals", currency) from None


def load_volume_tables(path: str | Path) -> VolumeTables:
    """Load volume table overrides from a JSON file.

    Raises:
        ValidationError: If the file cannot be read or is not shaped as expected

    """
    path = Path(path)
    try:
        data = orjson.loads(path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as e:
        raise ValidationError(f"Could not load volume tables from {path}") from e

    if not isinstance(data, dict):
        raise ValidationError(f"Volume tables in {path} must be a JSON object")

    min_volumes = data.get("minVolumes", {})
    volume_decimals = data.get("volumeDecimals", {})
    if not isinstance(min_volumes, dict) or not isinstance(volume_decimals, dict):
        raise ValidationError(
            f"minVolumes and volumeDecimals in {path} must be JSON objects"
        )

    log.info(
        "Loaded %d minimum volumes and %d volume decimals from %s",
        len(min_volumes),
        len(volume_decimals),
        path,
    )
    return VolumeTables(min_volumes=min_volumes, volume_decimals=volume_decimals)
